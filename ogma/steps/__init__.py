"""Ready-made step vocabularies."""

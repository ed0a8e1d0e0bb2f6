"""
Ogma — natural-language command scripts.

Given the addition of the input and 4 henceforth the left
When the left is equal to the right
Then do nothing

| Layer                      | Purpose                                        |
<--------------------------- + ---------------------------------------------- >
| **Tokenizer**              | Whitespace and back-tick aware words           |
| **Query decoder**          | `the name of the user` → key path              |
| **Data decoder**           | `3`, `true`, `` `text` ``, lists → values      |
| **Clause compiler**        | Template → Static / QueryVar / DataVar tokens  |
| **Keyword sequencing**     | Given ⊂ When ⊂ Then progression                |
| **Line matcher**           | One line × one clause → field values           |
| **Module compiler**        | First matching command type wins, per line     |
| **Virtual machine**        | Global store, immutable script, stepping loop  |
| **Inspection**             | Script listing and Graphviz export             |
"""

from . import analysis as _analysis
from . import bdd as _bdd
from . import clause as _clause
from . import data as _data
from . import errors as _errors
from . import matcher as _matcher
from . import module as _module
from . import query as _query
from . import tokenizer as _tokenizer
from . import vm as _vm

from .analysis import *
from .bdd import *
from .clause import *
from .data import *
from .errors import *
from .matcher import *
from .module import *
from .query import *
from .tokenizer import *
from .vm import *
from .cli import main, parse_args, run_repl

__all__ = []
for module in (_analysis, _bdd, _clause, _data, _errors, _matcher, _module, _query, _tokenizer, _vm):
    __all__.extend(getattr(module, '__all__', []))
__all__ += ['main', 'parse_args', 'run_repl']
__all__ = list(dict.fromkeys(__all__))

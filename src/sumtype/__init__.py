from .errors import *  # noqa
from .functions import *  # noqa
from .immutable import Immutable  # noqa
from .sumtype import *  # noqa

try:
    from . import hypothesis_strategies  # noqa
except ImportError:
    pass

__version__ = "0.1.0"
__all__ = [
    "compile",
    "load",
    "loads",
    "detect",
    "CompileResult",
    "BMSChart",
    "BMSHeaders",
    "BMSObjects",
    "BMSObject",
    "TimeSignatures",
    "CompileWarning",
]

from .loader import compile, load, loads, CompileResult
from .detector import detect
from .chart import BMSChart
from .headers import BMSHeaders
from .objects import BMSObjects
from .time_signatures import TimeSignatures
from .schemas import BMSObject, CompileWarning

from .api import Recognizer, Scanner, check_recognizer, make_recognizer
from .memory_recognizer import AutomatonRecognizer, MemoryScanner, TokenRule

# AntlrRecognizer is imported lazily by make_recognizer() / autosuggest.autosuggester()
__all__ = [
    "Recognizer",
    "Scanner",
    "check_recognizer",
    "make_recognizer",
    "AutomatonRecognizer",
    "MemoryScanner",
    "TokenRule",
]

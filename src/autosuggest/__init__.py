"""
Grammar Autosuggest

Suggests what text may legally follow a partially typed input, given the two
automata a grammar recognizer produces: a character-level automaton (the
lexer) and a token-level automaton (the parser).

The package is split by concern:
- Automaton model and hand-built automata (models)
- Recognizer contract plus in-memory and ANTLR adapters (recognizer)
- Tokenizing, token-automaton walk, character-automaton completion
- Orchestration and validation (engine)

Main Functions:
    configure(recognizer, case_preference): AutoSuggester over any recognizer
    autosuggester(LexerCls, ParserCls, case_preference): AutoSuggester over ANTLR classes

Example Usage:
    from autosuggest import autosuggester
    from MyGrammarLexer import MyGrammarLexer
    from MyGrammarParser import MyGrammarParser

    suggester = autosuggester(MyGrammarLexer, MyGrammarParser, "LOWER")
    suggester.suggest("SELECT * FR")   # -> ["OM"]
"""

# autosuggest/__init__.py
from .engine import AutoSuggester, autosuggester, configure  # re-export
from .errors import AutomatonContractError, AutosuggestError, RecognizerConfigError
from .models import Automaton, AutomatonBuilder, State, Token, TokenizationResult
from .recognizer import AutomatonRecognizer, TokenRule, make_recognizer
from .tokenizer import Tokenizer

__version__ = "1.0.0"
__all__ = [
    "AutoSuggester",
    "autosuggester",
    "configure",
    "make_recognizer",
    "AutomatonRecognizer",
    "TokenRule",
    "Automaton",
    "AutomatonBuilder",
    "State",
    "Token",
    "TokenizationResult",
    "Tokenizer",
    "AutosuggestError",
    "RecognizerConfigError",
    "AutomatonContractError",
]

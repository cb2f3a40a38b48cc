from preprocessing.sanitizer import (
    DEFAULT_PATTERNS,
    MarkupPatterns,
    WikitextSanitizer,
    compile_patterns,
    sanitize,
)
from preprocessing.tokenizer import tokenize, term_positions

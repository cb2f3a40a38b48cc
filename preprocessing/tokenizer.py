def _fold(char: str) -> str:
    # `str.lower` can expand one code point into several (U+0130 -> "i" + U+0307);
    # terms keep one code point per input character
    return char.lower()[0]


def is_term_char(char: str) -> bool:
    """Letters (L*) and decimal digits (Nd); other numerics such as `²` or `Ⅻ` are boundaries"""
    return char.isalpha() or char.isdecimal()


def tokenize(text: str) -> list[str]:
    """
    Lowercases `text` and splits it into runs of letters and digits.

    Every other character is a boundary and is dropped. The index of a token
    in the returned list is its position.
    """
    tokens = []
    buf = []
    for char in text:
        char = _fold(char)
        if is_term_char(char):
            buf.append(char)
        elif buf:
            tokens.append("".join(buf))
            buf = []

    if buf:
        tokens.append("".join(buf))

    return tokens


def term_positions(tokens: list[str]) -> dict[str, list[int]]:
    """Group a token list into term -> ascending positions"""
    positions: dict[str, list[int]] = {}
    for position, token in enumerate(tokens):
        if token not in positions:
            positions[token] = []

        positions[token].append(position)

    return positions

from preprocessing.tokenizer import term_positions, tokenize


def test_tokenize_lowercases_alphanumeric_runs():
    assert tokenize("Hello, World! 123") == ["hello", "world", "123"]


def test_tokenize_empty_and_punctuation():
    assert tokenize("") == []
    assert tokenize("!!! ,,, --- ...") == []


def test_tokenize_splits_on_underscore_and_apostrophe():
    assert tokenize("snake_case don't") == ["snake", "case", "don", "t"]


def test_tokenize_keeps_unicode_letters():
    assert tokenize("Café Ünïcode 東京") == ["café", "ünïcode", "東京"]


def test_tokenize_mixed_letters_and_digits():
    assert tokenize("COVID-19 in 2020s") == ["covid", "19", "in", "2020s"]


def test_term_positions_groups_in_order():
    tokens = tokenize("The cat saw a dog. The cat ran.")
    assert term_positions(tokens) == {
        "the": [0, 5],
        "cat": [1, 6],
        "saw": [2],
        "a": [3],
        "dog": [4],
        "ran": [7],
    }


def test_term_positions_empty():
    assert term_positions([]) == {}


def test_tokenize_lowercases_one_code_point_per_character():
    # "İ".lower() is "i" + U+0307 (a combining mark, not a letter)
    assert tokenize("İstanbul") == ["istanbul"]
    assert tokenize("İzmir ve İstanbul") == ["izmir", "ve", "istanbul"]


def test_tokenize_only_decimal_digits_join_terms():
    assert tokenize("x² Ⅻ ½ 42") == ["x", "42"]
    assert tokenize("٣٤ ३") == ["٣٤", "३"]


def test_term_positions_after_dotted_capital_i():
    tokens = tokenize("İstanbul cat İstanbul")
    assert term_positions(tokens) == {"istanbul": [0, 2], "cat": [1]}

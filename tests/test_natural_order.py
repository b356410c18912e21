from natural_order import lexical_compare, natural_compare, natural_key


def sign(x):
    return (x > 0) - (x < 0)


def test_numeric_runs_compare_by_value():
    assert natural_compare("item2", "item10") < 0
    assert natural_compare("item10", "item2") > 0
    assert natural_compare("cherry2", "cherry10") < 0


def test_case_insensitive():
    assert natural_compare("Apple", "banana") < 0
    assert natural_compare("apple", "APPLE") == 0
    assert lexical_compare("Apple", "apple") < 0


def test_leading_zeros_equal_value():
    assert natural_compare("a007", "a7") == 0


def test_prefix_sorts_first():
    assert natural_compare("abc", "abcd") < 0
    assert natural_compare("", "a") < 0
    assert natural_compare("", "") == 0


def test_antisymmetric():
    words = ["x1", "x01", "X2", "x10", "y", "", "10", "9", "a b", "ab"]
    for a in words:
        for b in words:
            assert sign(natural_compare(a, b)) == -sign(natural_compare(b, a))


def test_natural_key_with_sorted():
    words = ["file10.txt", "File2.txt", "file1.txt"]
    assert sorted(words, key=natural_key) == ["file1.txt", "File2.txt", "file10.txt"]


def test_long_digit_runs():
    small, big = "a" + "1" * 5000, "a" + "9" * 5000
    assert natural_compare(small, big) < 0
    assert natural_compare(big, small) > 0
    assert natural_compare("a" + "0" * 10 + "9" * 5000, big) == 0
    assert natural_compare("a" + "9" * 5000, "a1" + "0" * 5000) < 0


def test_unicode_decimal_digits():
    # Arabic-Indic three
    assert natural_compare("x٣", "x3") == 0
    assert natural_compare("x٣", "x10") < 0


def test_text_runs_fold_whole():
    assert natural_compare("ß", "ss") == 0
    assert natural_compare("Straße2", "STRASSE10") < 0


def test_prefix_run_meets_following_digit():
    assert natural_compare("a1", "ab") < 0
    assert natural_compare("a 1", "a1") < 0

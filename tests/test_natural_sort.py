"""Tests for natural alphanumeric ordering."""

from panelscope.pipeline.natural_sort import natural_compare, natural_key, natural_sorted


def test_digit_runs_compare_numerically():
    assert natural_sorted(["page10.jpg", "page2.jpg", "page1.jpg"]) == [
        "page1.jpg", "page2.jpg", "page10.jpg",
    ]


def test_mixed_names_scenario():
    names = ["b.png", "a.jpg", "c10.png", "c2.png"]
    assert natural_sorted(names) == ["a.jpg", "b.png", "c2.png", "c10.png"]


def test_case_insensitive():
    assert natural_sorted(["B.png", "a.png", "C.png"]) == ["a.png", "B.png", "C.png"]


def test_ties_are_deterministic():
    forward = natural_sorted(["page1.png", "Page1.png", "page01.png"])
    backward = natural_sorted(["page01.png", "Page1.png", "page1.png"])
    assert forward == backward
    assert len(set(forward)) == 3


def test_full_paths_are_compared():
    names = ["ch10/p1.jpg", "ch2/p10.jpg", "ch2/p9.jpg"]
    assert natural_sorted(names) == ["ch2/p9.jpg", "ch2/p10.jpg", "ch10/p1.jpg"]


def test_leading_digits_and_large_numbers():
    assert natural_sorted(["100.jpg", "20.jpg", "3.jpg"]) == ["3.jpg", "20.jpg", "100.jpg"]
    assert natural_sorted(["x99999999999999999999.png", "x2.png"])[0] == "x2.png"


def test_compare():
    assert natural_compare("page2.jpg", "page10.jpg") < 0
    assert natural_compare("page10.jpg", "page2.jpg") > 0
    assert natural_compare("page2.jpg", "page2.jpg") == 0


def test_separator_sorts_before_digit_run():
    assert natural_sorted(["a1.jpg", "a.jpg"]) == ["a.jpg", "a1.jpg"]
    assert natural_sorted(["ch1/01.jpg", "ch/01.jpg"]) == ["ch/01.jpg", "ch1/01.jpg"]
    assert natural_compare("a.jpg", "a1.jpg") < 0


def test_shorter_name_sorts_first():
    assert natural_sorted(["page1a.jpg", "page1.jpg", "page"]) == ["page", "page1.jpg", "page1a.jpg"]


def test_key_compares_digit_runs_as_one_element():
    elements, raw = natural_key("a12")
    assert elements == ((ord("a"), 0), (ord("0"), 12))
    assert raw == "a12"
    assert natural_key("A12")[0] == elements

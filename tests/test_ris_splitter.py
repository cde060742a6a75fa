"""Tests for splitting RIS text into record bodies."""
from risimport.parsers.ris import normalize_dashes, split_records


def test_two_records_yield_two_bodies():
    text = "TY  - JOUR\nT1  - A\nER  - \nTY  - BOOK\nT1  - B\nER  - \n"
    bodies = split_records(text)
    assert bodies == ["TY  - JOUR\nT1  - A", "TY  - BOOK\nT1  - B"]


def test_trailing_segment_is_not_a_record():
    assert split_records("A\nER  -\nB\nER  -\n") == ["A", "B"]


def test_empty_text_yields_no_records():
    assert split_records("") == []


def test_blank_text_yields_no_records():
    assert split_records("  \n\n\t\n") == []


def test_text_without_end_marker_is_one_record():
    assert split_records("TY  - JOUR\nT1  - Unterminated") == ["TY  - JOUR\nT1  - Unterminated"]


def test_final_end_marker_without_newline():
    assert split_records("TY  - JOUR\nER  - ") == ["TY  - JOUR"]


def test_end_marker_trailing_text_is_discarded():
    bodies = split_records("TY  - JOUR\nER  - end of reference 1\nTY  - BOOK\nER  - \n")
    assert bodies == ["TY  - JOUR", "TY  - BOOK"]


def test_back_to_back_end_markers_do_not_create_records():
    assert split_records("TY  - JOUR\nER  - \nER  - \n\nER  - \n") == ["TY  - JOUR"]


def test_blank_line_between_records_stays_with_next_body():
    bodies = split_records("TY  - JOUR\nER  - \n\nTY  - BOOK\nER  - \n")
    assert bodies == ["TY  - JOUR", "\nTY  - BOOK"]


def test_end_marker_must_start_the_line():
    bodies = split_records("N1  - see ER  - x\nER  - \n")
    assert bodies == ["N1  - see ER  - x"]


def test_dashes_normalized_before_split():
    bodies = split_records("T1  - a\u2013b\u2014c\u2015d\nER  - \n")
    assert bodies == ["T1  - a-b--c--d"]


def test_en_dash_in_end_marker_does_not_hide_it():
    """An en dash in the separator becomes "-", so the line still ends the record."""
    assert split_records("TY  - JOUR\nER  \u2013 \nTY  - BOOK\n") == ["TY  - JOUR", "TY  - BOOK"]


def test_normalize_dashes():
    assert normalize_dashes("pp. 10\u201320") == "pp. 10-20"
    assert normalize_dashes("a\u2014b") == "a--b"
    assert normalize_dashes("a\u2015b") == "a--b"
    assert normalize_dashes("plain - text") == "plain - text"

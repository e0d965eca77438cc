"""
Tests for receipt text normalization
"""
import pytest

from sales_receipt.extraction.sale_fields.shared_utils.text_cleaner import TextCleaner


@pytest.fixture
def cleaner():
    return TextCleaner()


@pytest.mark.parametrize("value", ['', None, 42, b'Total: 1.00'])
def test_normalize_never_throws_on_empty_or_non_string(cleaner, value):
    assert cleaner.normalize(value) == ''


def test_whitespace_collapsed_but_lines_kept(cleaner):
    text = "Case    29.99\r\nCable\t\t5.00  "

    assert cleaner.normalize(text) == "Case 29.99\nCable 5.00"


def test_split_decimal_points_repaired(cleaner):
    assert cleaner.normalize("Case 29 . 99") == "Case 29.99"
    assert cleaner.normalize("Case 29 .. 99") == "Case 29.99"


def test_currency_sign_spacing_fixed(cleaner):
    assert cleaner.normalize("Case $ 29.99") == "Case $29.99"


def test_doubled_punctuation_collapsed(cleaner):
    assert cleaner.normalize("Case $$29.99") == "Case $29.99"
    assert cleaner.normalize("Note.. see back") == "Note. see back"
    assert cleaner.normalize("Case --- blue") == "Case - blue"


def test_doubled_letters_only_collapsed_when_aggressive(cleaner):
    assert cleaner.normalize("Jeff Little") == "Jeff Little"
    assert cleaner.normalize("CCaassee", aggressive=True) == "Case"


def test_marker_lines_become_paragraphs(cleaner):
    text = "Acme Mobile\nTotal: $20.00\nThank you"

    assert cleaner.normalize(text) == "Acme Mobile\n\nTotal: $20.00\n\nThank you"


def test_second_label_on_a_line_starts_new_line(cleaner):
    text = "Customer: Jane Doe Phone: 555-123-4567"

    assert cleaner.normalize(text) == "Customer: Jane Doe\n\nPhone: 555-123-4567"


def test_compound_labels_are_not_split(cleaner):
    assert cleaner.normalize("Invoice Date: 03/15/2024") == "Invoice Date: 03/15/2024"
    assert cleaner.normalize("Grand Total: $145.50") == "Grand Total: $145.50"


def test_markers_inside_product_names_left_alone(cleaner):
    assert cleaner.normalize("Samsung Phone Case 19.99") == "Samsung Phone Case 19.99"
    assert cleaner.normalize("iPhone 15 Pro 999.00") == "iPhone 15 Pro 999.00"


def test_subtotal_not_split_into_total(cleaner):
    text = "Subtotal: 10.00 Total: 11.00"

    assert cleaner.normalize(text) == "Subtotal: 10.00\n\nTotal: 11.00"


@pytest.mark.parametrize("text", [
    "CUSTOMER INFORMATION\nCustomer Name: Jane Doe\nPhone: 555-123-4567",
    "Case 29 . 99\n\n\n\nTotal $ 29.99",
    "Customer: A Phone: 1 Date: 3/1/2024 Total: 5.00",
    "Note.. 1 .. 5 $$ 5 -- x",
    "  \r\n\tWidget 2.00 x2 $10.00  \n",
    "BILL TO: Sam\nSHIP TO: Sam",
])
@pytest.mark.parametrize("aggressive", [False, True])
def test_normalize_is_idempotent(cleaner, text, aggressive):
    once = cleaner.normalize(text, aggressive=aggressive)

    assert cleaner.normalize(once, aggressive=aggressive) == once


def test_flatten_collapses_newlines(cleaner):
    assert cleaner.flatten("a\n\n b\tc ") == "a b c"
    assert cleaner.flatten(None) == ''


def test_custom_marker_list():
    cleaner = TextCleaner(section_markers=['WARRANTY'])

    assert cleaner.normalize("Case 5.00\nWarranty: 1 year") == "Case 5.00\n\nWarranty: 1 year"
    assert cleaner.normalize("Case 5.00\nTotal: 5.00") == "Case 5.00\nTotal: 5.00"

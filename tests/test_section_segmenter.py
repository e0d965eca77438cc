"""
Tests for section segmentation
"""
import pytest

from sales_receipt.extraction.sale_fields.support_modules.section_segmenter import SectionSegmenter


@pytest.fixture
def segmenter():
    return SectionSegmenter()


def test_document_without_headers_is_one_header_section(segmenter):
    document = segmenter.segment("Acme Mobile\nCase 29.99\n03/15/2024")

    assert document.keys() == ['header']
    section = document.get('header')
    assert section.start_line == 0
    assert section.end_line == 2
    assert section.content == ("Acme Mobile", "Case 29.99", "03/15/2024")
    assert not document.has_headers


def test_header_lines_open_sections(segmenter):
    text = "CUSTOMER INFORMATION\nName: Ann\nORDER SUMMARY\nTotal: 1.00"

    document = segmenter.segment(text)

    assert document.keys() == ['customer_information', 'order_summary']
    customer, summary = document.sections
    assert (customer.start_line, customer.end_line) == (0, 1)
    assert (summary.start_line, summary.end_line) == (2, 3)
    assert summary.content[0] == "ORDER SUMMARY"


def test_preamble_goes_to_header_section(segmenter):
    document = segmenter.segment("Store: Downtown\nCustomer Details\nName: Ann")

    assert document.keys() == ['header', 'customer_details']
    assert document.get('header').line_range == range(0, 1)


def test_key_replaces_every_non_alphanumeric(segmenter):
    document = segmenter.segment("Customer Information:\nName: Ann")

    assert document.keys() == ['customer_information_']


def test_repeated_header_gets_suffix(segmenter):
    document = segmenter.segment("Order Summary\nCase 1.00\nOrder Summary\nCable 2.00")

    assert document.keys() == ['order_summary', 'order_summary_2']
    assert document.get('order_summary').content == ("Order Summary", "Case 1.00")


@pytest.mark.parametrize("text", [
    "",
    "\n\n",
    "Acme\n\nCUSTOMER INFORMATION\n\nName: Ann\n\nPRODUCT INFORMATION\nCase 1.00\n\n",
    "Billing Details\nOrder Summary\nPayment Details\nShipping Information",
])
def test_sections_cover_every_line_exactly_once(segmenter, text):
    document = segmenter.segment(text)

    rebuilt = [line for section in document.sections for line in section.content]
    assert rebuilt == text.split('\n')

    # contiguous, gap-free partition
    assert document.sections[0].start_line == 0
    for previous, current in zip(document.sections, document.sections[1:]):
        assert current.start_line == previous.end_line + 1
    assert document.sections[-1].end_line == len(document.lines) - 1


def test_scopes_end_with_whole_document(segmenter):
    document = segmenter.segment("Contact Information\nPhone: 555-123-4567\nOrder Summary\nTotal: 5.00")

    scopes = document.scopes_for(('customer', 'contact', 'billing'))

    assert [name for name, _ in scopes] == ['contact_information', 'document']
    assert scopes[-1][1] == document.document_text

"""
Tests for the optional LLM refinement step (Ollama calls are mocked)
"""
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

from sales_receipt.extraction.sale_fields.models import ExtractedSale, LineItem, ProductCategory
from sales_receipt.extraction.sale_fields.shared_utils.config_manager import ConfigManager
from sales_receipt.refinement.llm_refiner import LLMSaleRefiner

LLM_REPLY = """Here is the data:
{
  "customerName": "Jane Doe",
  "phoneNumber": null,
  "date": "2024-03-15",
  "products": [
    {"name": "Galaxy S24", "quantity": 500, "price": "$1,299.99"},
    {"name": "Case", "quantity": 1, "price": 19.99},
  ],
  "totalAmount": 1319.98,
  "storeLocation": "Downtown",
  "orderNumber": "A-100"
}
Let me know if you need anything else."""


def ollama_response(text):
    response = MagicMock()
    response.json.return_value = {'response': text}
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def refiner():
    return LLMSaleRefiner(ConfigManager(), ollama_url='http://ollama:11434/', model_name='test-model')


def test_needs_refinement():
    priced = ExtractedSale(products=(LineItem(name='Case', price=5.0),), total_amount=5.0)

    assert not LLMSaleRefiner.needs_refinement(priced)
    assert LLMSaleRefiner.needs_refinement(priced.with_changes(total_amount=0.0))
    assert LLMSaleRefiner.needs_refinement(ExtractedSale(total_amount=5.0))


def test_refine_fills_only_missing_fields(refiner):
    sale = ExtractedSale(customer_name='Janet', order_number='', extraction_method='flat')

    with patch('sales_receipt.refinement.llm_refiner.requests.post',
               return_value=ollama_response(LLM_REPLY)) as mock_post:
        refined = refiner.refine("Janet\nGalaxy S24 ...", sale)

    assert mock_post.call_args[0][0] == 'http://ollama:11434/api/generate'
    payload = mock_post.call_args[1]['json']
    assert payload['model'] == 'test-model'
    assert payload['stream'] is False
    assert 'Galaxy S24' in payload['prompt']

    assert refined.customer_name == 'Janet'
    assert refined.phone_number == ''
    assert refined.store_location == 'Downtown'
    assert refined.order_number == 'A-100'
    assert refined.total_amount == 1319.98
    assert refined.date == datetime(2024, 3, 15)
    assert refined.date_detected
    assert refined.extraction_method == 'llm_refined'

    galaxy, case = refined.products
    assert galaxy.quantity == 100
    assert galaxy.price == 1299.99
    assert galaxy.category == ProductCategory.ACTIVATION
    assert case.price == 19.99


def test_connection_error_keeps_sale(refiner):
    sale = ExtractedSale(customer_name='Jane')

    with patch('sales_receipt.refinement.llm_refiner.requests.post',
               side_effect=requests.exceptions.ConnectionError("refused")):
        assert refiner.refine("text", sale) is sale


def test_reply_without_json_keeps_sale(refiner):
    sale = ExtractedSale(customer_name='Jane')

    with patch('sales_receipt.refinement.llm_refiner.requests.post',
               return_value=ollama_response("I could not read this receipt.")):
        assert refiner.refine("text", sale) is sale


def test_reply_adding_nothing_keeps_method(refiner):
    sale = ExtractedSale(customer_name='Jane', extraction_method='flat')

    with patch('sales_receipt.refinement.llm_refiner.requests.post',
               return_value=ollama_response('{"customerName": "Other", "products": []}')):
        refined = refiner.refine("text", sale)

    assert refined is sale
    assert refined.extraction_method == 'flat'


@pytest.mark.parametrize("amount,expected", [
    (12.5, 12.5),
    ("$1,299.99", 1299.99),
    ("1,299", 1299.0),
    ("19,99", 19.99),
    (-4, 0.0),
    (True, 0.0),
    ("n/a", 0.0),
    (None, 0.0),
    (float("inf"), 0.0),
    (float("nan"), 0.0),
    (10 ** 400, 0.0),
    ("1" * 400 + ".00", 0.0),
])
def test_normalize_amount(amount, expected):
    assert LLMSaleRefiner._normalize_amount(amount) == expected


@pytest.mark.parametrize("quantity", ['"1e999"', '1e999', '"nan"', '"lots"'])
def test_unusable_quantity_defaults_to_one(refiner, quantity):
    reply = '{"products": [{"name": "Case", "quantity": %s, "price": 5}], "totalAmount": 5}' % quantity

    with patch('sales_receipt.refinement.llm_refiner.requests.post',
               return_value=ollama_response(reply)):
        refined = refiner.refine("Case", ExtractedSale())

    assert refined.products == (LineItem(name='Case', quantity=1, price=5.0),)
    assert refined.total_amount == 5.0

import json

import pytest
from bs4 import BeautifulSoup

from app.connectors.givebutter.donor_parser import scrape_dom_donors, scrape_embedded_donors
from app.core.errors import MalformedExtraction
from tests.helpers.pages import campaign_object, make_page, transaction_item


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_dom_scrape_reads_each_field():
    body = transaction_item("Jane Doe", "$1,234.56 USD", "3:05 PM", "For the kids") + transaction_item(
        "John Roe", "$20", "2:40 PM"
    )

    donors = scrape_dom_donors(_soup(make_page(body=body)))

    assert [d.name for d in donors] == ["Jane Doe", "John Roe"]
    assert donors[0].amount == 1234.56
    assert donors[0].time == "3:05 PM"
    assert donors[0].message == "For the kids"
    assert donors[1].message is None


def test_dom_scrape_supports_legacy_markup():
    body = (
        '<li class="activity-item"><h4>Old Markup</h4><span class="amount">$15</span>'
        '<time>1:00 PM</time><div class="comment">Go team</div></li>'
        '<li class="transaction-item"><span class="donor-name">Class Markup</span>'
        '<span class="transaction-amount">$7.50</span></li>'
    )

    donors = scrape_dom_donors(_soup(make_page(body=body)))

    assert [(d.name, d.amount) for d in donors] == [("Old Markup", 15.0), ("Class Markup", 7.5)]
    assert donors[0].message == "Go team"
    assert donors[0].time == "1:00 PM"


def test_dom_scrape_drops_items_without_signal():
    body = transaction_item() + transaction_item(amount="$0") + transaction_item(amount="$5")

    donors = scrape_dom_donors(_soup(make_page(body=body)))

    assert len(donors) == 1
    assert donors[0].name == "A generous supporter"
    assert donors[0].amount == 5.0


def test_dom_scrape_amount_with_trailing_period_is_kept():
    body = '<div class="activity-item"><span class="amount">$25.00 USD.</span></div>'

    donors = scrape_dom_donors(_soup(make_page(body=body)))

    assert [d.amount for d in donors] == [25.0]


def test_dom_scrape_explicit_zero_limit():
    body = transaction_item("Jane Doe", "$5")
    assert scrape_dom_donors(_soup(make_page(body=body)), limit=0) == []


def test_dom_scrape_keeps_named_zero_amount():
    donors = scrape_dom_donors(_soup(make_page(body=transaction_item("Anonymous Friend"))))
    assert donors[0].amount == 0.0


def test_dom_scrape_caps_at_ten_in_source_order():
    body = "".join(transaction_item(f"Donor {i}", f"${i + 1}") for i in range(15))

    donors = scrape_dom_donors(_soup(make_page(body=body)))

    assert len(donors) == 10
    assert donors[0].name == "Donor 0"
    assert donors[-1].name == "Donor 9"


def _transactions_script(transactions) -> str:
    return f"<script>window.__DATA__ = {{\"transactions\": {json.dumps(transactions)}}};</script>"


def test_embedded_transactions_are_mapped():
    transactions = [
        {"supporter_name": "Ana", "amount": "25.00", "time": "4:10 PM", "message": "Proud!"},
        {"name": "Ben", "amount": 10, "created_at": "2024-05-01T17:45:00Z"},
        {"amount": None},
    ]

    donors = scrape_embedded_donors(_soup(make_page(scripts=_transactions_script(transactions))))

    assert [d.name for d in donors] == ["Ana", "Ben", "A generous supporter"]
    assert [d.amount for d in donors] == [25.0, 10.0, 0.0]
    assert donors[0].time == "4:10 PM"
    assert donors[0].message == "Proud!"
    assert donors[1].message is None


def test_embedded_transactions_capped_at_ten():
    transactions = [{"name": f"D{i}", "amount": i} for i in range(12)]

    donors = scrape_embedded_donors(_soup(make_page(scripts=_transactions_script(transactions))))

    assert len(donors) == 10
    assert donors[0].name == "D0"


def test_embedded_transactions_explicit_zero_limit():
    script = _transactions_script([{"name": "D0", "amount": 1}])
    assert scrape_embedded_donors(_soup(make_page(scripts=script)), limit=0) == []


def test_embedded_transactions_missing_returns_empty():
    html = make_page(campaign_object(), body=transaction_item())
    assert scrape_embedded_donors(_soup(html)) == []


def test_embedded_transactions_unparseable_raises():
    script = "<script>var x = {transactions: [{name: 'Ana'}]};</script>"
    with pytest.raises(MalformedExtraction):
        scrape_embedded_donors(_soup(make_page(scripts=script)))

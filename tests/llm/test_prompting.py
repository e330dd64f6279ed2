"""Tests for prompt construction."""

from llm.prompting import build_system_prompt, build_transaction_prompt
from models.category import Category
from tests.helpers import make_transaction


def _category_line(category):
    return f'"{category.name}" (ID: {category.id})'


class TestBuildSystemPrompt:
    """Tests for build_system_prompt."""

    def test_lists_every_category_once_in_input_order(self, categories):
        """Each category line appears exactly once, in the order given."""
        prompt = build_system_prompt(categories)

        positions = []
        for category in categories:
            assert prompt.count(_category_line(category)) == 1
            positions.append(prompt.index(_category_line(category)))

        assert positions == sorted(positions)

    def test_reversed_input_reverses_listing(self, categories):
        """Output order follows input order, not any sorting."""
        prompt = build_system_prompt(list(reversed(categories)))

        first = prompt.index(_category_line(categories[-1]))
        last = prompt.index(_category_line(categories[0]))
        assert first < last

    def test_excludes_archived_and_group_categories(self, categories):
        """Archived and group categories never reach the prompt."""
        extra = [
            Category(id=10, name="Archived Thing", archived=True),
            Category(id=11, name="Group Thing", is_group=True),
        ]

        prompt = build_system_prompt(categories + extra)

        assert "Archived Thing" not in prompt
        assert "Group Thing" not in prompt

    def test_includes_non_blank_descriptions(self, categories):
        """Descriptions are appended after the name; blank ones are skipped."""
        prompt = build_system_prompt(categories)

        assert '"Groceries" (ID: 1) - Supermarkets and food stores' in prompt
        assert '"Restaurants" (ID: 3)\n' in prompt

    def test_states_output_contract(self, categories):
        """The model is told to answer with three exact names as JSON."""
        prompt = build_system_prompt(categories)

        assert '"suggestions"' in prompt
        assert "Include 3 suggestions, sorted by confidence (highest first)" in prompt
        assert "Confidence should be 0.0-1.0" in prompt
        assert "EXACT" in prompt

    def test_is_deterministic(self, categories):
        assert build_system_prompt(categories) == build_system_prompt(list(categories))

    def test_has_no_blank_lines(self, categories):
        prompt = build_system_prompt(categories)

        assert all(line.strip() for line in prompt.splitlines())


class TestBuildTransactionPrompt:
    """Tests for build_transaction_prompt."""

    def test_minimal_transaction(self):
        """Without metadata every derived field falls back to Unknown."""
        t = make_transaction(payee="Corner Store", amount="12.50")

        prompt = build_transaction_prompt(t)

        assert prompt.startswith("Please categorize this transaction:")
        assert "- Payee: Corner Store" in prompt
        assert "- Merchant: Corner Store" in prompt
        assert "- Amount: 12.50" in prompt
        assert "- Date: 2024-03-05" in prompt
        assert "- Plaid Category: Unknown" in prompt
        assert "- Personal Finance Category: Unknown" in prompt
        assert "- Payment Channel: Unknown" in prompt
        assert "- Location: Unknown" in prompt
        assert "- Pending: unknown" in prompt
        assert "Transaction Type" not in prompt
        assert "Counterpart" not in prompt

    def test_missing_payee(self):
        t = make_transaction(payee=None)

        prompt = build_transaction_prompt(t)

        assert "- Payee: Unknown" in prompt
        assert "- Merchant: Unknown" in prompt

    def test_merchant_precedence(self):
        """Metadata merchant name beats metadata name, which beats payee."""
        both = make_transaction(metadata={"merchant_name": "TJ", "name": "TRADER JOES #12"})
        name_only = make_transaction(metadata={"name": "TRADER JOES #12"})

        assert "- Merchant: TJ" in build_transaction_prompt(both)
        assert "- Merchant: TRADER JOES #12" in build_transaction_prompt(name_only)

    def test_currency_precedence(self):
        """Transaction currency wins over the metadata currency code."""
        own = make_transaction(currency="cad", metadata={"iso_currency_code": "USD"})
        meta = make_transaction(metadata={"iso_currency_code": "USD"})
        none = make_transaction()

        assert "- Currency: cad" in build_transaction_prompt(own)
        assert "- Currency: USD" in build_transaction_prompt(meta)
        assert "- Currency: \n" in build_transaction_prompt(none) + "\n"

    def test_full_metadata(self):
        """All derived classification fields are rendered from metadata."""
        t = make_transaction(
            notes="weekly shop",
            metadata={
                "category": ["Shops", "Supermarkets and Groceries"],
                "category_id": "19047000",
                "personal_finance_category": {
                    "primary": "FOOD_AND_DRINK",
                    "detailed": "FOOD_AND_DRINK_GROCERIES",
                    "confidence_level": "VERY_HIGH",
                },
                "payment_channel": "in store",
                "transaction_type": "place",
                "counterparties": [
                    {"name": "Trader Joe's", "type": "merchant", "confidence_level": "HIGH"},
                    {"name": "Visa", "type": "payment_terminal", "confidence_level": "LOW"},
                ],
                "location": {"city": "Portland", "region": "OR"},
                "pending": False,
            },
        )

        prompt = build_transaction_prompt(t)

        assert "- Notes: weekly shop" in prompt
        assert "- Plaid Category: Shops, Supermarkets and Groceries (#19047000)" in prompt
        assert (
            "- Personal Finance Category: FOOD_AND_DRINK > FOOD_AND_DRINK_GROCERIES "
            "(VERY_HIGH confidence)"
        ) in prompt
        assert "- Payment Channel: in store" in prompt
        assert "- Transaction Type: place" in prompt
        assert (
            "- Counterparties: Trader Joe's (merchant, HIGH); Visa (payment_terminal, LOW)"
        ) in prompt
        assert "- Location: Portland, OR" in prompt
        assert "- Pending: false" in prompt

    def test_single_counterparty_uses_singular_label(self):
        t = make_transaction(
            metadata={"counterparties": [{"name": "Shell", "type": "merchant", "confidence_level": "HIGH"}]}
        )

        prompt = build_transaction_prompt(t)

        assert "- Counterparty: Shell (merchant, HIGH)" in prompt
        assert "Counterparties" not in prompt

    def test_partial_personal_finance_category_and_location(self):
        t = make_transaction(
            metadata={
                "personal_finance_category": {"detailed": "TRANSPORTATION_GAS"},
                "location": {"region": "CA"},
                "pending": True,
            }
        )

        prompt = build_transaction_prompt(t)

        assert "- Personal Finance Category: TRANSPORTATION_GAS\n" in prompt
        assert "- Location: CA" in prompt
        assert "- Pending: true" in prompt

    def test_field_order(self):
        prompt = build_transaction_prompt(make_transaction())
        labels = [line.split(":")[0] for line in prompt.splitlines()[1:]]

        assert labels == [
            "- Payee",
            "- Merchant",
            "- Amount",
            "- Currency",
            "- Date",
            "- Notes",
            "- Plaid Category",
            "- Personal Finance Category",
            "- Payment Channel",
            "- Location",
            "- Pending",
        ]

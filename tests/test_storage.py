"""
Tests for the DynamoDB store, run against an in-memory table object.
"""

from decimal import Decimal

import pytest
from botocore.exceptions import ClientError

from sleeper_draftbot.storage import DataStoreError, DraftStore, StaleRegistrationError


def _eq_values(condition):
    """(attribute name, value) of a boto3 ``Key(...).eq(...)`` condition."""
    expression = condition.get_expression()
    attribute, value = expression["values"]
    return attribute.name, value


class FakeTable:
    """The slice of a boto3 Table resource the store uses."""

    def __init__(self, page_size=1):
        self.items = {}
        self.page_size = page_size
        self.put_calls = []
        self.error = None

    def _check(self, operation):
        if self.error is not None:
            raise ClientError({"Error": {"Code": self.error, "Message": "nope"}}, operation)

    def get_item(self, Key):
        self._check("GetItem")
        item = self.items.get((Key["PK"], Key["SK"]))
        return {"Item": dict(item)} if item else {}

    def put_item(self, Item, ConditionExpression=None):
        self._check("PutItem")
        self.put_calls.append((Item, ConditionExpression))
        self.items[(Item["PK"], Item["SK"])] = dict(Item)
        return {}

    def delete_item(self, Key):
        self._check("DeleteItem")
        self.items.pop((Key["PK"], Key["SK"]), None)
        return {}

    def query(self, KeyConditionExpression, FilterExpression=None, ExclusiveStartKey=None):
        self._check("Query")
        _, pk = _eq_values(KeyConditionExpression)
        rows = sorted(
            (item for (item_pk, _), item in self.items.items() if item_pk == pk),
            key=lambda item: item["SK"],
        )
        if ExclusiveStartKey:
            rows = [row for row in rows if row["SK"] > ExclusiveStartKey["SK"]]

        page, rest = rows[: self.page_size], rows[self.page_size :]
        if FilterExpression is not None:
            name, value = _eq_values(FilterExpression)
            page = [row for row in page if row.get(name) == value]

        response = {"Items": [dict(row) for row in page]}
        if rest:
            response["LastEvaluatedKey"] = {"PK": pk, "SK": rows[self.page_size - 1]["SK"]}
        return response


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def draft_store(settings, table):
    return DraftStore(settings, table=table)


class TestDraftRegistrations:
    async def test_save_and_get(self, draft_store, table):
        await draft_store.save_registration("d1", "C1", 4)

        registration = await draft_store.get_registration("d1")

        assert registration.channel_id == "C1"
        assert registration.baseline == 4
        assert ("DRAFT", "DRAFT#d1") in table.items

    async def test_decimal_counts_become_ints(self, draft_store, table):
        table.items[("DRAFT", "DRAFT#d1")] = {
            "PK": "DRAFT",
            "SK": "DRAFT#d1",
            "draftId": "d1",
            "slackChannelId": "C1",
            "lastKnownPickCount": Decimal("12"),
        }

        registration = await draft_store.get_registration("d1")

        assert registration.last_known_pick_count == 12
        assert isinstance(registration.last_known_pick_count, int)

    async def test_fractional_count_is_not_a_baseline(self, draft_store, table):
        table.items[("DRAFT", "DRAFT#d1")] = {
            "PK": "DRAFT",
            "SK": "DRAFT#d1",
            "slackChannelId": "C1",
            "lastKnownPickCount": Decimal("2.5"),
        }
        registration = await draft_store.get_registration("d1")
        assert registration.draft_id == "d1"
        assert registration.baseline is None

    async def test_missing_registration(self, draft_store):
        assert await draft_store.get_registration("nope") is None

    async def test_lookup_by_channel_pages_through_results(self, draft_store):
        for draft_id, channel_id in (("a", "C1"), ("b", "C2"), ("c", "C3")):
            await draft_store.save_registration(draft_id, channel_id)

        registration = await draft_store.get_registration_by_channel("C3")

        assert registration.draft_id == "c"
        assert len(await draft_store.list_registrations()) == 3

    async def test_register_draft_replaces_channel_draft(self, draft_store):
        await draft_store.save_registration("old", "C1", 30)
        await draft_store.save_registration("other", "C2", 5)

        await draft_store.register_draft("new", "C1")

        ids = sorted(r.draft_id for r in await draft_store.list_registrations())
        assert ids == ["new", "other"]
        assert (await draft_store.get_registration("new")).baseline == 0

    async def test_conditional_write(self, draft_store, table):
        await draft_store.save_registration("d1", "C1", 5, expected_count=2)

        _, condition = table.put_calls[-1]
        assert condition is not None

    async def test_failed_condition_is_stale(self, draft_store, table):
        table.error = "ConditionalCheckFailedException"
        with pytest.raises(StaleRegistrationError):
            await draft_store.save_registration("d1", "C1", 5, expected_count=2)

    async def test_client_errors_are_wrapped(self, draft_store, table):
        table.error = "ResourceNotFoundException"
        with pytest.raises(DataStoreError) as exc_info:
            await draft_store.get_registration_by_channel("C1")
        assert not isinstance(exc_info.value, StaleRegistrationError)

    async def test_delete(self, draft_store):
        await draft_store.save_registration("d1", "C1")
        await draft_store.delete_registration("d1")
        assert await draft_store.get_registration("d1") is None


class TestPlayersAndLeagues:
    async def test_player_mapping(self, draft_store):
        await draft_store.save_player_mapping("42", "U0123ABCD", "alice")

        mapping = await draft_store.get_player_mapping("42")

        assert mapping.slack_member_id == "U0123ABCD"
        assert mapping.slack_name == "alice"
        assert [m.sleeper_id for m in await draft_store.list_player_mappings()] == ["42"]

    async def test_player_name_defaults_to_member_id(self, draft_store):
        await draft_store.save_player_mapping("42", "U0123ABCD")
        assert (await draft_store.get_player_mapping("42")).slack_name == "U0123ABCD"

    async def test_leagues_grouped_by_channel(self, draft_store):
        await draft_store.save_league("L1", "C1", "One", "2025")
        await draft_store.save_league("L2", "C1", "Two", "2025")
        await draft_store.save_league("L3", "C2", "Three", "2025")

        channels = await draft_store.list_channels_with_leagues()
        in_c1 = await draft_store.get_leagues_by_channel("C1")

        assert sorted(channels) == ["C1", "C2"]
        assert [lg.league_name for lg in in_c1] == ["One", "Two"]

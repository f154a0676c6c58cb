"""Tests for TransactionScope."""

from wip_analytics.application.ports import TransactionScope


def test_factories_set_labels():
    assert TransactionScope.for_client("C1", ("T1",)).cache_token == "client:C1"
    assert TransactionScope.for_task("T1").task_ids == ("T1",)
    group = TransactionScope.for_group("G7", ("C1", "C2"))
    assert group.cache_token == "group:G7"
    assert group.client_ids == ("C1", "C2")


def test_cache_token_without_label_is_order_independent():
    first = TransactionScope(client_ids=("B", "A"), task_ids=("2", "1"))
    second = TransactionScope(client_ids=("A", "B"), task_ids=("1", "2"))

    assert first.cache_token == second.cache_token


def test_is_empty():
    assert TransactionScope().is_empty is True
    assert TransactionScope.for_task("T1").is_empty is False

"""Scope of ledger rows requested by a use case."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TransactionScope:
    """Clients and tasks whose ledger rows belong to a report.

    A row is in scope when its client is listed OR its task is listed; rows
    linked only through a task (common for fee rows) are therefore included.

    Attributes:
        client_ids: Client identifiers of the scope.
        task_ids: Task identifiers of the scope.
        label: Identifier of the scope used in cache keys and logs
            (client id, task id or group code).
    """

    client_ids: tuple[str, ...] = ()
    task_ids: tuple[str, ...] = ()
    label: str = ""

    @classmethod
    def for_client(
        cls,
        client_id: str,
        task_ids: tuple[str, ...] = (),
    ) -> "TransactionScope":
        """Build the scope of one client and its tasks."""
        return cls(
            client_ids=(client_id,),
            task_ids=tuple(task_ids),
            label=f"client:{client_id}",
        )

    @classmethod
    def for_task(cls, task_id: str) -> "TransactionScope":
        """Build the scope of a single task."""
        return cls(task_ids=(task_id,), label=f"task:{task_id}")

    @classmethod
    def for_group(
        cls,
        group_code: str,
        client_ids: tuple[str, ...],
        task_ids: tuple[str, ...] = (),
    ) -> "TransactionScope":
        """Build the scope of a client group."""
        return cls(
            client_ids=tuple(client_ids),
            task_ids=tuple(task_ids),
            label=f"group:{group_code}",
        )

    @property
    def is_empty(self) -> bool:
        """Return True when the scope names no client and no task."""
        return not self.client_ids and not self.task_ids

    @property
    def cache_token(self) -> str:
        """Return a stable token identifying the scope."""
        if self.label:
            return self.label
        clients = ",".join(sorted(self.client_ids))
        tasks = ",".join(sorted(self.task_ids))
        return f"clients:{clients}|tasks:{tasks}"


__all__ = ["TransactionScope"]

r"""
Insert/select/update/delete/aggregate suites shared by the
native-vs-query-builder programs.

Each operation gets one trial per client, in client order, so the
contenders are measured back to back within the same suite.
"""

from collections.abc import Sequence

from access_bench.benchmarks.clients import CrudClient
from access_bench.runner import Suite, Trial

__all__ = ["CRUD_SUITES", "build_crud_suites"]

# Suite name -> operations, in run order.
CRUD_SUITES: dict[str, list[str]] = {
    "Insert Operations": ["Single Insert", "Batch Insert"],
    "Select Operations": ["Select All", "Select By Id", "Select By Condition"],
    "Update Operations": ["Update Single Record"],
    "Delete Operations": ["Delete Single Record"],
    "Complex Operations": ["Complex Query"],
}


def _trial_name(client: CrudClient, operation: str) -> str:
    if operation == "Batch Insert":
        operation = client.batch_label
    return f"{client.label} - {operation}"


def build_crud_suites(clients: Sequence[CrudClient], *, min_samples: int = 5) -> list[Suite]:
    """Build the five CRUD suites comparing `clients`."""
    suites: list[Suite] = []
    for suite_name, operations in CRUD_SUITES.items():
        suite = Suite(suite_name)
        for operation in operations:
            for client in clients:
                suite.add(
                    Trial(
                        name=_trial_name(client, operation),
                        work=client.operations()[operation],
                        min_samples=min_samples,
                        kind=client.kind,
                    )
                )
        suites.append(suite)
    return suites

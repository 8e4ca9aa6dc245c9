from enum import IntEnum


class DecisionStatus(IntEnum):
    UNDECIDED = 0
    HEURISTICALLY_DECIDED_HALT = 1
    HEURISTICALLY_DECIDED_NON_HALT = 2
    DECIDED_HALT = 3
    DECIDED_NON_HALT = 4


def decision_status_from_api(status):
    """Map a decider API status code onto DecisionStatus.

    Only "decided" is recognised. "heuristic" results are not trusted yet and
    collapse to UNDECIDED with every other code. None means no status.
    """
    if status is None:
        return None

    if status == "decided":
        return DecisionStatus.DECIDED_NON_HALT
    elif status == "heuristic":
        return DecisionStatus.UNDECIDED
    return DecisionStatus.UNDECIDED

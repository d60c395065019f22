"""Random server selection."""

import random
from collections.abc import Sequence

from radiobrowser.models.endpoint import ServerEndpoint


def pick_server(pool: Sequence[ServerEndpoint], rng: random.Random | None = None) -> ServerEndpoint:
    """Pick a server uniformly at random.

    There is no stickiness or health tracking; load and failures are
    spread statistically across requests.

    Args:
        pool: Known servers. Not modified.
        rng: Random source, the module-level generator if omitted.

    Raises:
        ValueError: If the pool is empty.
    """
    if not pool:
        raise ValueError("Server pool is empty")
    return (rng or random).choice(pool)

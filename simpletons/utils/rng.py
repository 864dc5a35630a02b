import random


def make_rng(
    rng: random.Random | None = None, seed: int | None = None
) -> random.Random:
    """Caller's RNG if given, else a private one (seeded when *seed* is set).

    Never falls back to the module-level ``random`` state, so growth and
    mutation stay reproducible under a seed.
    """
    if rng is not None:
        return rng
    return random.Random(seed)

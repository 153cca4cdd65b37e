"""Sampling decisions for newly originated trace contexts."""

NOT_SAMPLED = "0"
SAMPLED = "1"


class SamplingPolicy:
    """Base policy deciding the sampled flag of a fresh trace context."""

    def decide(self) -> str:
        raise NotImplementedError


class FixedSamplingPolicy(SamplingPolicy):
    """Always returns the same decision."""

    def __init__(self, decision: str = NOT_SAMPLED) -> None:
        if decision not in (NOT_SAMPLED, SAMPLED):
            raise ValueError('decision must be "0" or "1"')
        self.decision = decision

    def decide(self) -> str:
        return self.decision


# Never self-initiate sampling; only upstream decisions are propagated.
DEFAULT_SAMPLING_POLICY = FixedSamplingPolicy(NOT_SAMPLED)

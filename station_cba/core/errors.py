"""Exceptions raised by the cost-benefit engine."""


class InvalidAssumptions(ValueError):
    """Economic assumptions that cannot be discounted over a valid horizon."""


class UndefinedRatio(ZeroDivisionError):
    """
    A ratio metric whose denominator is zero.

    Attributes:
        metric: Name of the ratio ('roi' or 'benefit_cost_ratio').
        numerator: Value of the numerator at the time of failure, so callers
            can decide on a sentinel (+inf, -inf or nan).
    """

    def __init__(self, metric: str, numerator: float) -> None:
        self.metric = metric
        self.numerator = numerator
        super().__init__(f"{metric} is undefined: denominator is zero (numerator={numerator:.6g})")

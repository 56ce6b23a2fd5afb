import logging
from math import prod
from .errors import InconsistentCombination

logger = logging.getLogger(__name__)


# formulas taken from https://en.wikipedia.org/wiki/Lagrange_polynomial
# evaluated at x = 0 and over the integers (no field), so every term has to divide exactly:
#   f(0) = sum_j y_j * prod_{m != j} x_m / prod_{m != j} (x_m - x_j)
def lagrange_term(shares, j: int) -> int:
    """
    exact integer contribution of shares[j] to f(0).
    raises InconsistentCombination if the term is not an integer
    """
    x_j = shares[j].x
    others = [share.x for m, share in enumerate(shares) if m != j]

    numerator = shares[j].y * prod(others)
    denominator = prod(x_m - x_j for x_m in others)

    quotient, remainder = divmod(numerator, denominator)
    if remainder != 0:
        # the operands can be far past the int -> str digit limit, so they are left out of the message
        raise InconsistentCombination(
            f"term for x={x_j} does not divide exactly (denominator has {denominator.bit_length()} bits)")
    return quotient


def interpolate_at_zero(shares) -> int:
    """
    Recover the constant term of the polynomial through the given points.

    Args:
        shares: sequence of Share objects with pairwise distinct x values

    Returns:
        f(0) as an exact integer

    Raises:
        ValueError: if shares is empty or has a repeated x value
        InconsistentCombination: if some term does not divide exactly
    """
    shares = list(shares)
    if not shares:
        raise ValueError("need at least one point to interpolate")
    if len({share.x for share in shares}) != len(shares):
        raise ValueError("x values must be pairwise distinct")

    return sum(lagrange_term(shares, j) for j in range(len(shares)))


class LagrangeReconstructor:
    def reconstruct(self, combination):
        """returns the candidate secret for one combination, or None if it is inconsistent"""
        try:
            secret = interpolate_at_zero(combination)
        except InconsistentCombination as e:
            logger.debug("inconsistent combination %s: %s", [share.x for share in combination], e)
            return None
        logger.debug("combination %s -> %d", [share.x for share in combination], secret)
        return secret

    # lets an instance be handed straight to executor.map
    __call__ = reconstruct

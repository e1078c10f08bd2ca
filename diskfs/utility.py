"""Small arithmetic helpers shared by the disk structures."""


def _truncating_divmod(n: int, s: int) -> tuple[int, int]:
    """Divide truncating toward zero; the remainder takes the sign of ``n``."""
    if s == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(n) // abs(s)
    if (n < 0) != (s < 0):
        quotient = -quotient
    return quotient, n - s * quotient


def div_round_down(n: int, s: int) -> int:
    """Return ``n / s`` truncated toward zero."""
    return _truncating_divmod(n, s)[0]


def div_round_up(n: int, s: int) -> int:
    """Return ``n / s``, plus one when a positive remainder is left over."""
    quotient, remainder = _truncating_divmod(n, s)
    return quotient + (1 if remainder > 0 else 0)
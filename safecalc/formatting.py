from decimal import ROUND_HALF_UP, Decimal, localcontext

from safecalc.config import DISPLAY_PRECISION


def format_number(value: float, precision: int = DISPLAY_PRECISION) -> str:
    """Render a finite float as a plain decimal string.

    The shortest decimal form of ``value`` is rounded half-up to
    ``precision`` places, which hides representation noise
    (0.1 + 0.2 => 0.3) and rounds halfway cases away from zero
    (2.5e-12 => 0.000000000003). The output is always positional, never
    exponent notation, so it can be fed back into the tokenizer.
    """
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # enough digits to hold the integral part plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + precision + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    if rounded == 0:
        # also folds -0.0 into "0"
        return "0"
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

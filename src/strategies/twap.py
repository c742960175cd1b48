from .strategy import SliceContext, Strategy


class TwapStrategy(Strategy):
    """
    Time-weighted: every slice executes an equal share of the
    clipped quantity.
    """

    name = "TWAP"

    def adjust_quantity(self, qty: float, ctx: SliceContext) -> float:
        return qty / ctx.slice_count

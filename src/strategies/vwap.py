from .strategy import SliceContext, Strategy


class VwapStrategy(Strategy):
    """
    Volume-weighted: scale the evenly split quantity by the slice's
    share of total volume. A slice with average volume gets exactly
    the TWAP quantity.
    """

    name = "VWAP"
    uses_volume = True

    def adjust_quantity(self, qty: float, ctx: SliceContext) -> float:
        if not ctx.volumes:
            raise RuntimeError("VWAP requires a schedule with volumes")

        total_volume = sum(ctx.volumes)
        return qty * (ctx.volumes[ctx.index] / total_volume) * ctx.slice_count

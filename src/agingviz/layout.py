"""
Scales and bar geometry for the grouped bar chart.

Age groups get an outer band each, categories an inner band within it; values
map linearly onto pixels with the upper bound extended to a round tick.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from omegaconf import DictConfig
from plotly.colors import qualitative

from .aggregation import AggregateResult
from .constants import NICE_TICK_COUNT

# Thresholds for choosing 1, 2, 5 or 10 as the tick step mantissa
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(x: float) -> float:
    return math.floor(x + 0.5)


def tick_increment(start: float, stop: float, count: int) -> float:
    """Tick step for ``count`` ticks; negative values encode 1/step for steps < 1."""
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10**power
    return -(10**-power) / factor


def nice_domain(
    lo: float, hi: float, count: int = NICE_TICK_COUNT
) -> Tuple[float, float]:
    """Extend ``[lo, hi]`` outward so both ends fall on tick boundaries."""
    if hi < lo:
        start, stop = nice_domain(hi, lo, count)
        return stop, start
    if hi == lo:
        return lo, hi

    start, stop = lo, hi
    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        prestep = step
    return start, stop


@dataclass
class BandScale:
    """Discrete keys mapped onto contiguous, evenly spaced pixel bands."""

    domain: Sequence[str]
    range: Tuple[float, float]
    padding_inner: float = 0.0
    padding_outer: float = 0.0
    align: float = 0.5
    round: bool = True
    step: float = field(init=False)
    bandwidth: float = field(init=False)
    _starts: Dict[str, float] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        n = len(self.domain)
        r0, r1 = self.range
        start, stop = (r1, r0) if r1 < r0 else (r0, r1)

        step = (stop - start) / max(1, n - self.padding_inner + self.padding_outer * 2)
        if self.round:
            step = math.floor(step)
        start += (stop - start - step * (n - self.padding_inner)) * self.align
        bandwidth = step * (1 - self.padding_inner)
        if self.round:
            start = _round_half_up(start)
            bandwidth = _round_half_up(bandwidth)

        positions = [start + step * i for i in range(n)]
        if r1 < r0:
            positions.reverse()

        self.step = step
        self.bandwidth = bandwidth
        self._starts = dict(zip(self.domain, positions))

    def __call__(self, key: str) -> float:
        return self._starts[key]

    def center(self, key: str) -> float:
        return self(key) + self.bandwidth / 2


@dataclass
class LinearScale:
    """Continuous value to pixel mapping."""

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = NICE_TICK_COUNT) -> List[float]:
        """Evenly spaced round values covering the domain."""
        lo, hi = sorted(self.domain)
        if hi == lo:
            return [lo]
        step = tick_increment(lo, hi, count)
        if step > 0:
            first, last = math.ceil(lo / step), math.floor(hi / step)
            return [i * step for i in range(first, last + 1)]
        first, last = math.ceil(lo * -step), math.floor(hi * -step)
        return [i / -step for i in range(first, last + 1)]


def get_palette(name: str) -> List[str]:
    """Look up a plotly qualitative palette by name."""
    try:
        return list(getattr(qualitative, name))
    except AttributeError as e:
        raise ValueError(f"Unknown color palette: {name}") from e


@dataclass
class OrdinalColorScale:
    """One palette color per category, assigned in domain order."""

    domain: Sequence[str]
    palette: Sequence[str]

    def __call__(self, key: str) -> str:
        index = list(self.domain).index(key)
        return self.palette[index % len(self.palette)]

    def mapping(self) -> Dict[str, str]:
        return {key: self(key) for key in self.domain}


@dataclass
class BarGeometry:
    age_group: str
    category: str
    value: float
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass
class ChartLayout:
    """Positions, scales and colors needed to draw one grouped bar chart."""

    width: int
    height: int
    margin: Dict[str, int]
    outer: BandScale
    inner: BandScale
    y: LinearScale
    color: OrdinalColorScale
    bars: List[BarGeometry]

    @property
    def baseline(self) -> float:
        return self.y(0)


def build_chart_layout(result: AggregateResult, chart_config: DictConfig) -> ChartLayout:
    """Map the flattened series onto banded x scales and a nice y scale."""
    width = int(chart_config.width)
    height = int(chart_config.height)
    margin = {key: int(chart_config.margin[key]) for key in ("top", "right", "bottom", "left")}

    outer = BandScale(
        domain=result.age_groups,
        range=(margin["left"], width - margin["right"]),
        padding_inner=float(chart_config.outer_padding),
    )
    inner_padding = float(chart_config.inner_padding)
    inner = BandScale(
        domain=result.categories,
        range=(0, outer.bandwidth),
        padding_inner=inner_padding,
        padding_outer=inner_padding,
    )

    max_value = float(result.series["Value"].max()) if not result.is_empty else 0.0
    y_domain = nice_domain(0.0, max_value) if max_value > 0 else (0.0, 1.0)
    y = LinearScale(domain=y_domain, range=(height - margin["bottom"], margin["top"]))

    color = OrdinalColorScale(
        domain=result.categories, palette=get_palette(chart_config.palette)
    )

    bars: List[BarGeometry] = []
    for row in result.series.itertuples(index=False):
        value = float(row.Value)
        top = y(value)
        bars.append(
            BarGeometry(
                age_group=row.AgeGroup,
                category=row.Category,
                value=value,
                x=outer(row.AgeGroup) + inner(row.Category),
                y=top,
                width=inner.bandwidth,
                height=y(0) - top,
                color=color(row.Category),
            )
        )

    return ChartLayout(
        width=width,
        height=height,
        margin=margin,
        outer=outer,
        inner=inner,
        y=y,
        color=color,
        bars=bars,
    )

"""Fixed modelling assumptions used by the metric calculators."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Constants shared by the calculators.

    The latency and rack figures are planning assumptions, not measurements:
    every fabric hop is modelled as a 10 m fiber run and every rack as 42U.
    """

    # Usable height of one standard rack, in rack units
    rack_units_per_rack: int = 42

    # Fiber run per hop in km (10 m)
    fiber_km_per_hop: float = 0.01

    # One optic on each end of a link
    optics_per_link: int = 2

    # Decimal places of the formatted oversubscription ratio
    ratio_precision: int = 2

    # Reported ratio when the uplink capacity is zero
    undefined_ratio: str = "∞"

    # Share of leaf ports assumed to face servers when sizing parallel links
    auto_parallel_downlink_share: float = 0.5

    # Leaf port count assumed when a configuration carries zero or none
    fallback_leaf_port_count: int = 48

    # Downlink speed assumed when the label carries no digits
    fallback_downlink_gbps: int = 100

    # Defaults for configurations without spine or leaf settings
    default_spine_port_count: int = 64
    default_spine_port_speed: str = "800G"
    default_spine_breakout_mode: str = "1x800G"
    default_leaf_port_count: int = 48
    default_leaf_downlink_speed: str = "100G"
    default_leaf_breakout_mode: str = "1x100G"

    def format_ratio(self, value: float) -> str:
        """Format a finite ratio with the configured precision."""
        return f"{value:.{self.ratio_precision}f}"


# Global configuration instance
ENGINE_CONFIG = EngineConfig()

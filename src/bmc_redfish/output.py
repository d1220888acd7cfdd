"""Text rendering of telemetry for the command line."""

from typing import List

from .model.power import Power
from .model.software_inventory import SoftwareInventory
from .model.thermal import Thermal


def _status(status) -> str:
    if status is None or not status.state:
        return "Unknown"
    return f"{status.state} - {status.health}" if status.health else status.state


def format_power_output(power: Power) -> str:
    """
    Format power metrics for display.

    Args:
        power: Power resource of the primary chassis

    Returns:
        Formatted string output
    """
    lines = [f"Power: {power.id or 'Power'}"]

    for control in power.power_control:
        metrics = control.power_metrics
        # Prefer the average, fall back to the instantaneous reading
        if metrics is not None and metrics.average_consumed_watts is not None:
            interval = f" ({metrics.interval_in_min}min avg)" if metrics.interval_in_min else ""
            lines.append(f"Average Power: {metrics.average_consumed_watts} W{interval}")
        if control.power_consumed_watts is not None:
            lines.append(f"Current Power: {control.power_consumed_watts} W")
        if metrics is not None and metrics.max_consumed_watts is not None:
            lines.append(f"Peak Power: {metrics.max_consumed_watts} W")
        if control.power_limit is not None and control.power_limit.limit_in_watts:
            lines.append(f"Power Limit: {control.power_limit.limit_in_watts} W")
        if control.power_capacity_watts is not None:
            lines.append(f"Max Capacity: {control.power_capacity_watts} W")

    if power.power_supplies:
        lines.append("\nPower Supplies:")
        for ps in power.power_supplies:
            lines.append(f"  {ps.name or ps.member_id}: {_status(ps.status)}")
            if ps.power_capacity_watts is not None:
                lines.append(f"    Capacity: {ps.power_capacity_watts} W")
            output = ps.power_output_watts if ps.power_output_watts is not None else ps.last_power_output_watts
            lines.append(f"    Output: {output} W" if output is not None else "    Output: N/A")
            if ps.power_output_amps is not None:
                lines.append(f"    Current: {ps.power_output_amps} A")
            if ps.power_input_watts is not None:
                lines.append(f"    Input: {ps.power_input_watts} W")
            if ps.efficiency_percent is not None:
                lines.append(f"    Efficiency: {ps.efficiency_percent}%")

    if power.voltages:
        lines.append("\nVoltages:")
        for v in power.voltages:
            lines.append(f"  {v.name or v.member_id}: {v.reading_volts} V")

    return "\n".join(lines)


def format_thermal_output(thermal: Thermal) -> str:
    lines = ["Temperatures:"]
    for t in thermal.temperatures:
        lines.append(f"  {t.name or t.member_id}: {t.reading_celsius} C")

    if thermal.fans:
        lines.append("\nFans:")
        for fan in thermal.fans:
            units = f" {fan.reading_units}" if fan.reading_units else ""
            lines.append(f"  {fan.name or fan.fan_name or fan.member_id}: {fan.reading}{units}")

    if thermal.leak_detectors:
        lines.append("\nLeak Detectors:")
        for detector in thermal.leak_detectors:
            lines.append(f"  {detector.name or detector.id}: {detector.detector_state or 'Unknown'}")

    return "\n".join(lines)


def format_firmware_output(inventories: List[SoftwareInventory]) -> str:
    return "\n".join(f"{fw.id}: {fw.version or 'N/A'}" for fw in inventories)

"""Static fault-preset tables and default sensor rosters."""

from odsynth.presets.catalog import (
    COMPUTED_ODS_FAULTS,
    KEYPHASOR_ID,
    ODS_BASELINE,
    ODS_FAULT_TABLE,
    ORBIT_FAULT_TABLE,
    PROBE_X_ID,
    PROBE_Y_ID,
    ComponentOverride,
    ODSFault,
    OrbitFault,
    apply_ods_fault,
    apply_orbit_fault,
    apply_overrides,
    default_ods_roster,
    default_orbit_roster,
    ods_overrides,
    soft_foot_order,
)

__all__ = [
    "COMPUTED_ODS_FAULTS",
    "KEYPHASOR_ID",
    "ODS_BASELINE",
    "ODS_FAULT_TABLE",
    "ORBIT_FAULT_TABLE",
    "PROBE_X_ID",
    "PROBE_Y_ID",
    "ComponentOverride",
    "ODSFault",
    "OrbitFault",
    "apply_ods_fault",
    "apply_orbit_fault",
    "apply_overrides",
    "default_ods_roster",
    "default_orbit_roster",
    "ods_overrides",
    "soft_foot_order",
]

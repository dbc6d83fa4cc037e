# causeway/loads.py
# ------------------------------------------------------------
# Closed-form load and deck formulas for a submersible causeway.
#
# What this file provides
# -----------------------
# - Gross geometry (volume, plan area, perimeter)
# - Dead load from concrete self-weight, live load from a deck intensity
# - Foundation footprint / pressure and the bearing safety margin
# - Material take-off (concrete, reinforcement, formwork)
# - Simply supported deck idealisation (bending moment, deflection)
#
# Units convention
# ----------------
# - Lengths: metres (m)
# - Dead load: volume [m^3] * density [t/m^3]
# - Live load: area [m^2] * intensity [kN/m^2]
# - Pressures: load / m^2, in the same units as the soil bearing table
#
# Geometry conventions
# --------------------
# - The causeway is a solid rectangular prism length x width x height.
# - The foundation footprint is the deck plan area enlarged by a constant
#   factor; it never depends on soil type.
#
# Notes
# -----
# - All functions are pure and assume validated, positive geometry.
#   Validation lives in structural.py so errors surface before any maths.
#
from __future__ import annotations

from typing import Tuple

from . import constants as C


# -----------------------------
# Geometry
# -----------------------------
def gross_geometry(length: float, width: float, height: float) -> Tuple[float, float, float]:
    """
    Returns (volume [m^3], surface_area [m^2], perimeter [m]).

        V = L * W * H
        A = L * W
        P = 2 * (L + W)
    """
    volume = length * width * height
    surface_area = length * width
    perimeter = 2.0 * (length + width)
    return volume, surface_area, perimeter


# -----------------------------
# Loads
# -----------------------------
def dead_load(volume: float, density: float = C.CONCRETE_DENSITY) -> float:
    """Self-weight of the concrete body: DL = V * density."""
    return volume * density


def live_load(surface_area: float, intensity: float = C.LIVE_LOAD_INTENSITY) -> float:
    """Uniform deck traffic load over the plan area: LL = A * q."""
    return surface_area * intensity


# -----------------------------
# Foundation
# -----------------------------
def foundation_area(surface_area: float, factor: float = C.FOUNDATION_AREA_FACTOR) -> float:
    """Foundation footprint: A_f = factor * A."""
    return surface_area * factor


def foundation_pressure(total_load: float, area: float) -> float:
    """
    Average bearing pressure q = P / A_f.

    Parameters
    ----------
    total_load : dead + live load
    area       : foundation footprint [m^2], must be > 0

    Returns
    -------
    float
        Pressure in the units of the soil bearing table.
    """
    if area <= 0.0:
        raise ValueError("Foundation area must be > 0.")
    return total_load / area


def safety_margin(bearing_capacity: float, pressure: float) -> float:
    """
    Ratio of allowable bearing to actual pressure, q_allow / q.

    A zero pressure (no load) is treated as an infinite margin.
    """
    if pressure <= 0.0:
        return float("inf")
    return bearing_capacity / pressure


# -----------------------------
# Materials
# -----------------------------
def material_takeoff(
    volume: float,
    surface_area: float,
    perimeter: float,
    height: float,
    steel_ratio: float = C.STEEL_RATIO,
) -> Tuple[float, float, float]:
    """
    Returns (concrete [m^3], steel [t], formwork [m^2]).

        concrete = V
        steel    = V * steel_ratio          (0.08 t/m^3 = 80 kg/m^3)
        formwork = P * H + A                (side shutters + soffit/top)
    """
    concrete = volume
    steel = volume * steel_ratio
    formwork = perimeter * height + surface_area
    return concrete, steel, formwork


# -----------------------------
# Deck beam idealisation
# -----------------------------
def distributed_load(total_load: float, length: float, width: float) -> float:
    """w = P / (L * W), load per unit deck area."""
    return total_load / (length * width)


def simply_supported_moment(w: float, length: float) -> float:
    """Mid-span bending moment of a simply supported strip: M = w L^2 / 8."""
    return w * length ** 2 / 8.0


def second_moment_of_area(width: float, height: float) -> float:
    """Rectangular section: I = W H^3 / 12."""
    return width * height ** 3 / 12.0


def simply_supported_deflection(
    w: float,
    length: float,
    inertia: float,
    elastic_modulus: float = C.ELASTIC_MODULUS,
) -> float:
    """
    Mid-span deflection under uniform load:

        δ = 5 w L^4 / (384 E I)
    """
    if inertia <= 0.0 or elastic_modulus <= 0.0:
        raise ValueError("Section stiffness must be > 0.")
    return 5.0 * w * length ** 4 / (384.0 * elastic_modulus * inertia)


def allowable_moment(
    width: float,
    height: float,
    fck: float = C.CONCRETE_GRADE_FCK,
    stress_ratio: float = C.ALLOWABLE_STRESS_RATIO,
) -> float:
    """
    Allowable moment from a permissible compressive stress, in kN·m.

        σ_allow = stress_ratio * fck               [N/mm^2]
        Z       = (b d^3 / 12) / (d / 2)           [mm^3], b and d in mm
        M_allow = σ_allow * Z / 1e6                [kN·m]
    """
    b_mm = width * 1000.0
    d_mm = height * 1000.0
    inertia_mm4 = b_mm * d_mm ** 3 / 12.0
    section_modulus = inertia_mm4 / (d_mm / 2.0)
    return stress_ratio * fck * section_modulus / 1.0e6


def allowable_deflection(length: float, ratio: float = C.DEFLECTION_LIMIT_RATIO) -> float:
    """Serviceability limit L / ratio."""
    return length / ratio


__all__ = [
    "gross_geometry",
    "dead_load",
    "live_load",
    "foundation_area",
    "foundation_pressure",
    "safety_margin",
    "material_takeoff",
    "distributed_load",
    "simply_supported_moment",
    "second_moment_of_area",
    "simply_supported_deflection",
    "allowable_moment",
    "allowable_deflection",
]

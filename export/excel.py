# export/excel.py
# ------------------------------------------------------------
# Excel export utilities for the causeway design tool.
#
# What this file provides
# -----------------------
# - build_input_table(inp)            → pandas.DataFrame of inputs
# - build_results_table(result)       → pandas.DataFrame of structural results
# - build_trace_table(result)         → pandas.DataFrame of applied formulas
# - build_cost_table(estimate)        → pandas.DataFrame of cost lines
# - build_suggestions_table(report)   → pandas.DataFrame of optimisation advice
# - build_comparison_table(cmp)       → pandas.DataFrame of a two-design diff
# - export_to_excel_bytes(result,...) → bytes of an .xlsx workbook with:
#       * "Summary" sheet (safety outcome + key numbers)
#       * "Inputs"  sheet
#       * "Results" sheet
#       * "Trace"   sheet
#   Optional "Cost", "Optimization" and "Environment" sheets; a health
#   score, when given, is written into the Summary sheet.
#
# Dependencies: pandas, numpy, xlsxwriter (pandas uses it as engine)
#
from __future__ import annotations

from io import BytesIO
from typing import Optional

import numpy as np
import pandas as pd

# Import dataclasses for typing & dict access (no heavy logic here)
from causeway.models import (
    CalculationResult,
    ComparisonResult,
    CostEstimate,
    DesignInput,
    EnvironmentalAssessment,
    HealthScore,
    OptimizationReport,
)


# -----------------------------
# Table builders (pandas)
# -----------------------------
def build_input_table(inp: DesignInput) -> pd.DataFrame:
    """
    Flatten DesignInput into a tidy two-column table for Excel.
    """
    data = {
        "Parameter": [
            "Length (m)",
            "Width (m)",
            "Height (m)",
            "Water depth (m)",
            "Soil type",
            "Load type",
            "Required safety factor",
        ],
        "Value": [
            inp.length,
            inp.width,
            inp.height,
            inp.water_depth,
            str(getattr(inp.soil_type, "value", inp.soil_type)),
            str(getattr(inp.load_type, "value", inp.load_type)),
            inp.safety_factor,
        ],
    }
    return pd.DataFrame(data)


def build_results_table(result: CalculationResult) -> pd.DataFrame:
    """
    Structural quantities with units, rounded for presentation.
    """
    s = result.structural
    b = result.beam
    rows = [
        ("Volume", s.volume, "m³"),
        ("Surface area", s.surface_area, "m²"),
        ("Perimeter", s.perimeter, "m"),
        ("Dead load", s.dead_load, ""),
        ("Live load", s.live_load, ""),
        ("Total load", s.total_load, ""),
        ("Foundation area", s.foundation_area, "m²"),
        ("Soil bearing capacity", s.soil_bearing_capacity, ""),
        ("Foundation pressure", s.foundation_pressure, ""),
        ("Safety margin", s.safety_margin, "-"),
        ("Concrete", s.materials.concrete, "m³"),
        ("Steel", s.materials.steel, "t"),
        ("Formwork", s.materials.formwork, "m²"),
        ("Bending moment", b.bending_moment, "kN·m"),
        ("Allowable bending moment", b.allowable_bending_moment, "kN·m"),
        ("Deflection", b.deflection, "mm"),
        ("Allowable deflection", b.allowable_deflection, "mm"),
    ]
    df = pd.DataFrame(rows, columns=["Quantity", "Value", "Unit"])
    df["Value"] = df["Value"].astype(float).round(2)
    return df


def build_trace_table(result: CalculationResult) -> pd.DataFrame:
    rows = [
        {
            "Category": step.category,
            "Step": step.name,
            "Formula": step.formula,
            "Substituted": step.substituted,
            "Result": round(step.result, 2),
            "Unit": step.unit,
        }
        for step in result.trace
    ]
    return pd.DataFrame(rows, columns=["Category", "Step", "Formula", "Substituted", "Result", "Unit"])


def build_cost_table(estimate: CostEstimate) -> pd.DataFrame:
    """
    One row per cost line plus labour and total; share of total in percent.
    """
    items = list(estimate.materials.items()) + [("labor", estimate.labor)]
    df = pd.DataFrame(
        {
            "Item": [name.capitalize() for name, _ in items] + ["Total"],
            "Cost": [value for _, value in items] + [estimate.total],
            "Share (%)": [estimate.breakdown.get(name, np.nan) for name, _ in items] + [100.0],
        }
    )
    df["Cost"] = df["Cost"].round(0)
    df["Share (%)"] = df["Share (%)"].round(1)
    return df


def build_suggestions_table(report: OptimizationReport) -> pd.DataFrame:
    rows = [
        {
            "Type": s.type.value,
            "Suggestion": s.suggestion,
            "Potential savings": s.potential_savings,
            "Impact": s.impact.value,
        }
        for s in report.suggestions
    ]
    return pd.DataFrame(rows, columns=["Type", "Suggestion", "Potential savings", "Impact"])


def build_comparison_table(cmp: ComparisonResult) -> pd.DataFrame:
    rows = [
        ("Volume difference", cmp.volume_diff_pct, "%"),
        ("Cost difference", cmp.cost_diff_pct, "%"),
        ("Safety margin difference", cmp.safety_diff, "-"),
        ("Concrete difference", cmp.material_diff.concrete, "m³"),
        ("Steel difference", cmp.material_diff.steel, "t"),
        ("Baseline cost", cmp.baseline_cost, ""),
        ("Candidate cost", cmp.candidate_cost, ""),
    ]
    df = pd.DataFrame(rows, columns=["Metric", "Value", "Unit"])
    df["Value"] = df["Value"].astype(float).round(2)
    return df


# -----------------------------
# Excel writer
# -----------------------------
def export_to_excel_bytes(
    result: CalculationResult,
    *,
    estimate: Optional[CostEstimate] = None,
    report: Optional[OptimizationReport] = None,
    environment: Optional[EnvironmentalAssessment] = None,
    health: Optional[HealthScore] = None,
) -> bytes:
    """
    Create an in-memory .xlsx workbook with summary, inputs, results and trace.
    Cost, optimisation and environment sheets are added when given; a health
    score is written into the Summary sheet.

    Returns
    -------
    bytes
        The content of the .xlsx file, ready for download or saving.
    """
    bio = BytesIO()
    with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
        # 1) Summary
        _write_summary_sheet(writer, result, health)

        # 2) Inputs / Results / Trace
        build_input_table(result.inputs).to_excel(writer, sheet_name="Inputs", index=False)
        build_results_table(result).to_excel(writer, sheet_name="Results", index=False)
        build_trace_table(result).to_excel(writer, sheet_name="Trace", index=False)

        # 3) Optional decision-support sheets
        if estimate is not None:
            build_cost_table(estimate).to_excel(writer, sheet_name="Cost", index=False)
        if report is not None:
            build_suggestions_table(report).to_excel(writer, sheet_name="Optimization", index=False)
        if environment is not None:
            _environment_table(environment).to_excel(writer, sheet_name="Environment", index=False)

        for name, widths in _COLUMN_WIDTHS.items():
            _set_widths(writer, name, widths)

    return bio.getvalue()


# -----------------------------
# Helpers (xlsxwriter formatting)
# -----------------------------
_COLUMN_WIDTHS = {
    "Inputs": (28, 16),
    "Results": (28, 14, 8),
    "Trace": (20, 22, 24, 48, 14, 8),
    "Cost": (14, 16, 12),
    "Optimization": (24, 80, 32, 14),
    "Environment": (28, 18, 10),
}


def _environment_table(env: EnvironmentalAssessment) -> pd.DataFrame:
    rows = [
        ("Concrete carbon", env.carbon.concrete, "kg CO2e"),
        ("Steel carbon", env.carbon.steel, "kg CO2e"),
        ("Total carbon", env.carbon.total, "kg CO2e"),
        ("Flow obstruction", env.water.flow_obstruction, "%"),
        ("Scour depth", env.water.scour_depth, "m"),
        ("Impact score", env.impact_score, "-"),
    ]
    df = pd.DataFrame(rows, columns=["Metric", "Value", "Unit"])
    df["Value"] = df["Value"].round(2)
    return df


def _write_summary_sheet(
    writer: pd.ExcelWriter,
    result: CalculationResult,
    health: Optional[HealthScore] = None,
) -> None:
    ws = writer.book.add_worksheet("Summary")
    writer.sheets["Summary"] = ws

    # Formats
    h1 = writer.book.add_format({"bold": True, "font_size": 14})
    h2 = writer.book.add_format({"bold": True, "font_size": 12})
    lab = writer.book.add_format({"bold": True})
    okf = writer.book.add_format({"bold": True, "font_color": "#007700"})
    nof = writer.book.add_format({"bold": True, "font_color": "#AA0000"})

    rec = result.recommendation
    ws.write(0, 0, "Submersible Causeway Design Summary", h1)

    ws.write(2, 0, "Safety margin:", lab)
    ws.write_number(2, 1, round(float(result.structural.safety_margin), 2))
    ws.write(3, 0, "Required safety factor:", lab)
    ws.write_number(3, 1, float(result.inputs.safety_factor))
    ws.write(4, 0, "Overall status:", lab)
    ws.write(4, 1, "SAFE" if rec.is_safe else "NOT SAFE", okf if rec.is_safe else nof)
    ws.write(5, 0, "Foundation type:", lab)
    ws.write(5, 1, rec.foundation_type.value)
    ws.write(6, 0, "Construction method:", lab)
    ws.write(6, 1, rec.construction_method.value)

    row = 8
    if health is not None:
        ws.write(row, 0, "Health score", h2)
        ws.write(row + 1, 0, "Overall:", lab)
        ws.write_number(row + 1, 1, health.overall)
        ws.write(row + 1, 2, health.rating.value)
        row += 2
        for name, value in health.scores.as_dict().items():
            ws.write(row, 0, name.capitalize())
            ws.write_number(row, 1, value)
            row += 1
        row += 1

    if rec.considerations is not None:
        ws.write(row, 0, "Design considerations", h2)
        row += 1
        for note in rec.considerations.notes:
            ws.write(row, 0, note)
            row += 1

    ws.set_column(0, 0, 30)
    ws.set_column(1, 2, 18)


def _set_widths(writer: pd.ExcelWriter, sheet_name: str, widths) -> None:
    ws = writer.sheets.get(sheet_name)
    if ws is None:
        return
    for col, width in enumerate(widths):
        ws.set_column(col, col, width)


__all__ = [
    "build_input_table",
    "build_results_table",
    "build_trace_table",
    "build_cost_table",
    "build_suggestions_table",
    "build_comparison_table",
    "export_to_excel_bytes",
]

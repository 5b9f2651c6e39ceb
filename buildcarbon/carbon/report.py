"""CarbonReport model and Markdown generation for a build-up summary."""

from __future__ import annotations

import json
from typing import Any

from buildcarbon.models.buildup import AssemblyTotals


class CarbonReport:
    """Per-layer and total embodied carbon of one build-up (per m2)."""

    def __init__(
        self,
        buildup_id: str = "",
        name: str = "",
        layers: list[dict[str, Any]] | None = None,
        totals: AssemblyTotals | None = None,
        classification_codes: list[str] | None = None,
    ) -> None:
        self.buildup_id = buildup_id
        self.name = name
        self.layers = layers or []
        self.totals = totals or AssemblyTotals()
        self.classification_codes = classification_codes or []

    def to_markdown(self) -> str:
        """Generate the build-up summary as Markdown."""
        lines: list[str] = []

        lines.append(f"# Build-up — {self.name or 'Unnamed'}")
        lines.append("")
        lines.append("**Build-up Area:** 1 m2 (standard)")
        if self.classification_codes:
            lines.append(f"**NRM Elements:** {', '.join(self.classification_codes)}")
        lines.append("")

        if self.layers:
            lines.append("## Layers")
            lines.append("")
            lines.append("| Item | Material | Thickness (mm) | Mass (kg) | A1-A3 inc bio (kgCO2e) | A1-A3 bio (kgCO2e) |")
            lines.append("|------|----------|----------------|-----------|------------------------|--------------------|")
            for row in self.layers:
                lines.append(
                    f"| {row.get('item_name', '')} | {row.get('material', '')} "
                    f"| {row.get('thickness_mm', 0):g} | {row.get('mass_per_area', 0):.2f} "
                    f"| {row.get('carbon_inc_biogenic_per_area', 0):.2f} "
                    f"| {row.get('carbon_biogenic_per_area', 0):.2f} |"
                )
            lines.append("")

        t = self.totals
        lines.append("## Totals")
        lines.append("")
        lines.append("| Total | Value |")
        lines.append("|-------|-------|")
        lines.append(f"| Thickness | {t.total_thickness:g} mm |")
        lines.append(f"| Mass | {t.total_mass:.2f} kg |")
        lines.append(f"| A1-A3 inc biogenic | {t.total_carbon_inc_biogenic:.2f} kgCO2e |")
        lines.append(f"| A1-A3 biogenic | {t.total_carbon_biogenic:.2f} kgCO2e |")
        lines.append(f"| A1-A3 exc biogenic | {t.total_carbon_exc_biogenic:.2f} kgCO2e |")
        lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Return structured JSON for the external store."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def to_dict(self) -> dict[str, Any]:
        """Return dict representation."""
        return {
            "buildup_id": self.buildup_id,
            "name": self.name,
            "layers": self.layers,
            "totals": self.totals.model_dump(),
            "total_carbon_exc_biogenic": self.totals.total_carbon_exc_biogenic,
            "classification_codes": self.classification_codes,
        }

"""Physics Calculator plugin manifest."""

manifest = {
    "title": "Physics Calculator",
    "summary": "Evaluate LaTeX expressions with SI units and physical constants, answered in scientific notation.",
    "category": "General Utilities",
    "blueprint": "physics_calculator",
    "icon": "img/GeneralUtilityTools_icon.png",
}

__all__ = ["manifest"]

"""SVG output for laid-out charts."""

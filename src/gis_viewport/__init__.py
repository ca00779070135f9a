"""Geographic map viewport: projections, zoom and navigation history."""

"""Pure viewport math: coordinates, scales, projections, history."""

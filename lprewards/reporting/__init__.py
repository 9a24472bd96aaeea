"""Human-readable result summaries."""

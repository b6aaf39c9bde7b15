"""Viewport-aware semantic visibility engine.

Per-frame decisions for a keyword/content map:
- hover highlighting (filtering)
- zoom-dependent visibility and phase curves (zoom)
- edge magnets for off-screen nodes (pulling)
"""

__version__ = "0.1.0"

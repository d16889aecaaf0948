"""
Tests for plantgen

This package contains unit tests for:
- Vector, quaternion and Bezier math
- Splines, paths, stems and the plant hierarchy
- Dotted parameter and derivation trees
- Wind skeletons and keyframe blending
- Plant policies and operation reports
"""

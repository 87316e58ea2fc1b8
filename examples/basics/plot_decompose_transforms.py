"""
Decomposing 2D affine transforms
================================

This example demonstrates how affinekit builds affine matrices from named
transforms, factors them back into translation, rotation, shear and scale, and
round-trips them through transform strings.
"""

# %%
# Import necessary libraries
import numpy as np

from affinekit import AffineMatrix, decompose_affine, parse

# %%
# Build a matrix
# --------------
# Each call returns a new matrix. Later calls act inside the frame set up by
# earlier ones, so the scale below is applied to points before the rotation and
# the translation.

m = AffineMatrix.identity().translate(50, 100).rotate(30).scale(2, 3)
m

# %%
# Map points through it, one at a time or as an (N, 2) array.

m.apply((1, 0))

# %%

square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]])
m.apply_points(square)

# %%
# Decompose it
# ------------
# The factors are recovered exactly, with the rotation in [0, 2*pi).

d = decompose_affine(m)
d, d.rotation_degrees

# %%
# Recomposing the factors gives back the original matrix.

d.to_matrix().equals(m)

# %%
# Transform strings
# -----------------
# Serializing writes the shortest equivalent list of transform functions, and
# parsing it gives back the same matrix.

text = m.to_css_string()
text

# %%

parse(text).equals(m, 1e-5)

# %%
# Angle units are converted on parsing, and unknown text is skipped.

parse("rotate(0.25turn) whatever skewX(0.1rad)")

# %%
# Singular matrices cannot be decomposed, so they are written in matrix() form.

AffineMatrix.from_components(1, 0, 0, 0, 0, 0).to_css_string()

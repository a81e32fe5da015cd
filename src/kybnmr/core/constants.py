"""Physical constants used by the conformer double check."""

# Hartree to kcal/mol (CODATA)
HARTREE_TO_KCAL = 627.5094

# Rounded factor found in older runs; only for reproducing them.
LEGACY_HARTREE_TO_KCAL = 627.51

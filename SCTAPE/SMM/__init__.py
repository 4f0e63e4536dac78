# =============================================================================
# SCTAPE/SMM/__init__.py — Signal Mapping Module
# =============================================================================
#
# The SMM is the single source of truth for the Supercharger tape format:
# sample rate, tone cycle lengths and volumes, tone durations, and the fixed
# header field values.
#
# All other SCTAPE sub-modules (SGM, SVM) import exclusively from here.
# Never define tape constants outside this module.
#
# Sub-modules:
#   constants.py  — timing constants, protocol values, TapeProfile
# =============================================================================

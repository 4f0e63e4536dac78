# =============================================================================
# SCTAPE/SVM/__init__.py — Signal Verification Module
# =============================================================================
#
# The SVM contains all tools for verifying that generated tapes conform to
# the Supercharger loader's expectations before they are recorded to cassette.
#
# Sub-modules:
#   tape_decoder.py  — decodes a tape WAV back into header, blocks and image,
#                      checking every checksum and page (CLI + importable)
#   validate.py      — automated self-test of the entire SCTAPE stack
# =============================================================================

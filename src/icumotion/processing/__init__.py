"""This is the processing submodule.

This module contains the functionality necessary to turn a resampled recording into
motion features. This includes high-pass filtering, event masking, the signal
magnitude area, and the activity bout analysis tools.
"""

"""FIR Watch: Baghdad FIR traffic counts and peak-window alarm."""

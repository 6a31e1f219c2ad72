"""
Solver module for CNF-based Fix-a-Pix solving.

This module provides the SAT/ILP backend adapter that decides a CNF
formula and the decoder that turns its model back into a painted grid.
"""

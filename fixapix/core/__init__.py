"""
Core grid model and puzzle IO for the Fix-a-Pix solver.
"""

"""
Constraint module: variable indexing, clause building and the
exactly-k encoding of Fix-a-Pix clues.
"""

"""Video-level operations: scene extraction, clip shuffling and concatenation"""

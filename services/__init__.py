"""
services/ - Business Logic Layer
=================================
Services orchestrate repositories and translate their outcomes into domain errors.
The (external) console shell talks only to this layer.
"""

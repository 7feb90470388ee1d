"""Top-level package for the Nouakchott destination resolver.

Turns a spoken Hassaniya destination request (audio or transcript) into
one place of a small fixed gazetteer, falling back to a semantic matcher
and to an external geocoder when fuzzy matching is not confident enough.
"""

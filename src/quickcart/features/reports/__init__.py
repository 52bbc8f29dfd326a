"""Inventory reporting for Quick Cart

This package turns the product catalogue into summary statistics and a
paginated PDF report. The pipeline is split into an aggregator, a pure
layout engine, a reportlab renderer and a generator that sequences them.
HTTP handlers delegate to service functions, which load products from the
database and run the generator."""

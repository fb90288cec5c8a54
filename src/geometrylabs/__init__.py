"""Interactive geometry labs: typed units, a viewport mapper and transform pipelines behind a Qt canvas."""
__version__ = "0.1.0"

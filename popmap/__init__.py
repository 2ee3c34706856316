"""Population choropleth world map generator."""

__version__ = "0.1.0"

"""Convert Voyager BREAD configurations to Filament 4 resources."""

__version__ = "0.1.0"

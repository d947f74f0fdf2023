"""Site configuration, logging, binary lookup and console helpers."""

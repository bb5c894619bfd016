"""Services that make up the import pipeline (classify, build, interpret)."""

"""Study application module: session lifecycle, reviews, speed batches and analytics."""

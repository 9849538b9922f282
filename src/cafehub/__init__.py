"""CafeHub — cafe listings, ratings and reviews."""

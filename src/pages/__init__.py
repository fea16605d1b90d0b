"""Page objects for the hotel booking UI."""

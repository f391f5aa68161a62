"""LinkedIn company discovery: search, extract, score and cache."""

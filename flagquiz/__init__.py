"""Flag quiz: match country flags to country names."""

"""City weather lookup with debounced autocomplete over OpenWeatherMap."""

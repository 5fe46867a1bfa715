"""
tsprimer - Data Cleaning and Time Series Primer

Modules:
- config: Settings shared by both chapters (.env overrides)
- chapter1: String Cleaning (field extraction + wide-to-long reshape)
- chapter2: Time Series (decomposition, forecast recurrences, ETS selection)
"""

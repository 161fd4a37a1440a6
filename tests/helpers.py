import datetime

# Start of every test session's clock
T0 = datetime.datetime(2024, 3, 4, 9, 0)

"""Root conftest: selects a non-GUI matplotlib backend for the test session."""
import matplotlib

matplotlib.use("Agg")

from .sample import compute_sample_stats

__all__ = ["compute_sample_stats"]

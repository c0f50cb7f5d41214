from .core import suggest
from .io import result_to_dict, write_scores_csv, write_manifest

__all__ = ["suggest", "result_to_dict", "write_scores_csv", "write_manifest"]

from .config import AdmissionConfig, AppConfigError, load_admission_config
from .state import AppState, Route

__all__ = ["AdmissionConfig", "AppConfigError", "AppState", "Route", "load_admission_config"]

"""Overcollateralised stablecoin engine."""
from .config import AppConfig, NetworkConfig, load_config
from .deploy import Deployment, deploy
from .engine import DSCEngine

__all__ = ["AppConfig", "DSCEngine", "Deployment", "NetworkConfig", "deploy", "load_config"]

"""
Machine credentials from Kubernetes Secrets.
"""

from .machine_secret import MachineSecret, MachineSecretLoader, SecretValidationError

__all__ = ['MachineSecret', 'MachineSecretLoader', 'SecretValidationError']

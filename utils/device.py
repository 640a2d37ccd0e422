"""
Device selection for placement tensors.

Placement compares distances in float64, so only CUDA and CPU are
considered. MPS (Apple Silicon) has no float64 support and is skipped.
"""

import torch

if torch.cuda.is_available():
    DEFAULT_DEVICE = torch.device("cuda")
    DEVICE_NAME = "CUDA"
else:
    DEFAULT_DEVICE = torch.device("cpu")
    DEVICE_NAME = "CPU"


def get_device() -> torch.device:
    """
    Get the default device for placement.

    Returns:
        torch.device: CUDA when available, otherwise CPU
    """
    return DEFAULT_DEVICE


def get_device_name() -> str:
    return DEVICE_NAME


def resolve_device(device=None) -> torch.device:
    """
    Turn a device argument into a torch.device.

    Args:
        device: None (use the default), a device string or a torch.device

    Returns:
        torch.device

    Raises:
        ValueError: If the device is MPS
    """
    if device is None:
        return DEFAULT_DEVICE
    device = torch.device(device) if isinstance(device, str) else device
    if device.type == "mps":
        raise ValueError("MPS has no float64 support; use 'cpu' or 'cuda'")
    return device

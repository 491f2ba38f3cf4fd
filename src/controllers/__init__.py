from .input_controller import InputController

__all__ = [
    'InputController',
]

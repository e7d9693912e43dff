"""
Calorie calculation strategies.
"""
from .calorie_calculator import (
    CalorieStrategy,
    HarrisBenedictStrategy,
    MifflinStJeorStrategy,
    CalculatorFactory,
    get_factory,
)

__all__ = [
    'CalorieStrategy',
    'HarrisBenedictStrategy',
    'MifflinStJeorStrategy',
    'CalculatorFactory',
    'get_factory',
]

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, TypeVar
from functools import wraps
import inspect
from magento_migration.utils.exceptions import ValidationError

T = TypeVar('T')

@dataclass
class ValidationRule:
    """Validation rule configuration"""
    field: str
    validator: Callable[[Any], bool]
    error_message: str

def non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ''

def Validation(*rules: ValidationRule):
    """
    Validates coroutine arguments against the given rules before the call.
    All failing rules are reported together in one ValidationError.
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        sig = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            bound_args = sig.bind(*args, **kwargs)
            errors: Dict[str, str] = {}

            for rule in rules:
                if rule.field in bound_args.arguments:
                    value = bound_args.arguments[rule.field]
                    if not rule.validator(value):
                        errors[rule.field] = rule.error_message

            if errors:
                raise ValidationError(
                    f"Invalid arguments for {func.__name__}",
                    context={'errors': errors}
                )
            return await func(*args, **kwargs)

        return wrapper

    return decorator

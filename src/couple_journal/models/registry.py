from typing import Dict, Type, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)

# 所有对外暴露的 BaseModel 都登记在这里, 名字 -> 类
BASE_MODEL_REGISTRY: Dict[str, Type[BaseModel]] = {}


############################################################################################################
def register_base_model_class(cls: Type[T]) -> Type[T]:
    assert issubclass(cls, BaseModel), f"{cls} is not a pydantic BaseModel"
    assert (
        cls.__name__ not in BASE_MODEL_REGISTRY
    ), f"duplicate model class name: {cls.__name__}"
    BASE_MODEL_REGISTRY[cls.__name__] = cls
    return cls


############################################################################################################
def get_registered_model_class(name: str) -> Type[BaseModel]:
    return BASE_MODEL_REGISTRY[name]

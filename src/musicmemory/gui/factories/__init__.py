from .viewmodel_factory import ViewModelFactory

__all__ = ["ViewModelFactory"]

"""
Custom exceptions for the restaurant NLU pipeline.
"""


class NLUError(Exception):
    """Base exception for the NLU pipeline"""
    pass


class ConfigurationError(NLUError):
    """Missing or malformed corpus, dictionary or handler configuration"""
    pass


class TrainingDataError(NLUError):
    """No usable training examples remain after cleaning"""
    pass


class ModelNotTrainedError(NLUError):
    """A model was used before it was trained or restored"""
    pass


class ArtifactError(NLUError):
    """A persisted model artifact does not have the expected structure"""
    pass

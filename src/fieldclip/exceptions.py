class FieldClipError(Exception):
    # base exception for all fieldclip errors.
    pass


class InputUnavailableError(FieldClipError):
    # the input is absent or cannot be decomposed into fields.
    pass


class DensityPlotError(FieldClipError):
    # a density plot cannot be drawn for the given values.
    pass


class ConfigError(FieldClipError):
    # invalid configuration values or files.
    pass

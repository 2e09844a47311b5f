class CLIError(Exception):
    pass


class SourceError(CLIError):
    pass

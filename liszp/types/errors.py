class LiszpError(Exception):
    """ Base class for all Liszp errors"""
    pass

class LiszpInvalidSymbol(LiszpError):
    """ Raised when a non-symbol is used where a name is required"""
    pass

class LiszpUnboundSymbol(LiszpError):
    """ Raised when a symbol is used before it is bound"""
    pass

class LiszpSyntaxError(LiszpError):
    """ Raised when source text or a special form is malformed"""

class LiszpArityError(LiszpError):
    """ Raised when the number of arguments passed to a function or macro is incorrect"""

class LiszpPanic(LiszpError):
    """ Raised by (panic msg) and by any unrecoverable misuse of a value"""

class LiszpTypeError(LiszpPanic):
    """ Raised when the types of arguments passed to a function are incorrect"""

class LiszpUserError(LiszpError):
    """ Raised by (error msg), e.g. for domain errors such as max of an empty list"""

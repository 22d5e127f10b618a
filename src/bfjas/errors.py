## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class BFError(Exception):
    def __init__(self, message: str = "", *, bf_token=None, bf_index=None):
        """Base class for all errors raised by the compiler and interpreter."""
        super().__init__(message)
        self.bf_token: str = bf_token
        self.bf_index: int = bf_index

class BFParseError(BFError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None, index=None):
        super().__init__(message, bf_token=token, bf_index=index)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token
        self.index = index

class BFUnmatchedLoop(BFParseError):
    """Loop-close `]` found with no open `[` to pair with."""
    pass

class BFUnclosedLoop(BFParseError, lark.exceptions.ParseError):
    """End of program reached while a `[` is still open."""
    def __init__(self, message, *, filename=None, line=None, column=None, token=None, index=None):
        super().__init__(message, filename=filename, line=line, column=column, token=token, index=index)

class BFLabelError(BFError, RuntimeError):
    pass


class BFTapeError(BFError, IndexError):
    """Tape pointer moved outside the fixed-size tape and a cell was accessed."""
    def __init__(self, message: str = "", *, bf_token=None, bf_index=None, pointer=None, tape_size=None):
        super().__init__(message, bf_token=bf_token, bf_index=bf_index)
        self.pointer = pointer
        self.tape_size = tape_size

from .lexer import Token, scan, tokenize
from .parser import parse, parse_source
from .compiler import lower
from .bytecode import check_jumps, disassemble
from .vm import VirtualMachine
from .errors import BFError, BFInputError, BFInternalError, BFSyntaxError
from .api import CompileOptions, CompileResult, RunOptions, RunResult, compile_file, compile_string, run_code, run_file, run_string

__all__ = [
    'Token',
    'scan',
    'tokenize',
    'parse',
    'parse_source',
    'lower',
    'check_jumps',
    'disassemble',
    'VirtualMachine',
    'BFError',
    'BFInputError',
    'BFInternalError',
    'BFSyntaxError',
    'CompileOptions',
    'CompileResult',
    'RunOptions',
    'RunResult',
    'compile_string',
    'compile_file',
    'run_code',
    'run_string',
    'run_file',
]

import logging
from typing import List, Optional, Union

from fastapi import FastAPI
from pydantic import BaseModel

from basic_ast import ast_to_dict
from config import load_settings
from errors import BasicError, InputError
from interpreter import Interpreter
from lexer import Lexer
from parser import parse_program
from state import EvalState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

settings = load_settings()

app = FastAPI(title="BASIC Interpreter", version="1.0.0")

# --- Modelos de Dados ---
class CodeRequest(BaseModel):
    code: str

class RunRequest(BaseModel):
    code: str
    inputs: List[Union[int, str]] = []
    max_steps: Optional[int] = None

# --- Lógica Auxiliar ---

class ScriptedState(EvalState):
    """
    Estado de execução para a API: INPUT consome a lista de entradas enviada
    na requisição e PRINT acumula a saída em uma lista.
    """
    def __init__(self, inputs):
        super().__init__(read_input=self._next_input, write_output=self._collect)
        self.pending = list(inputs)
        self.output = []

    def _next_input(self, prompt):
        if not self.pending:
            raise InputError("Entradas insuficientes para os comandos INPUT")
        return self.pending.pop(0)

    def _collect(self, text):
        self.output.append(text)


def tokenize_program(code):
    tokens = []
    for source_line, raw in enumerate(code.splitlines(), start=1):
        tokens.extend(Lexer(raw, source_line).tokenize())
    return tokens


def error_message(e):
    return f"{type(e).__name__}: {e}"

# --- Endpoints da API ---

@app.post("/api/compile")
async def compile_code(request: CodeRequest):
    try:
        program = parse_program(request.code)
    except BasicError as e:
        return {"success": False, "errors": [error_message(e)]}

    token_list = [
        {"type": t.type.name, "value": t.value, "line": t.line, "column": t.column}
        for t in tokenize_program(request.code)
    ]
    ast = {
        "type": "Program",
        "lines": {str(line.number): ast_to_dict(line.statement) for line in program},
    }
    return {"success": True, "tokens": token_list, "ast": ast}


@app.post("/api/run")
async def run_code(request: RunRequest):
    max_steps = settings.max_steps
    if request.max_steps is not None:
        max_steps = min(request.max_steps, settings.max_steps)

    state = ScriptedState(request.inputs)
    try:
        program = parse_program(request.code)
        Interpreter(program, state, max_steps=max_steps, retry_input=False).run()
    except BasicError as e:
        logger.info("Execução falhou: %s", e)
        return {
            "success": False,
            "output": state.output,
            "variables": dict(state.variables),
            "error": error_message(e),
        }
    return {"success": True, "output": state.output, "variables": dict(state.variables)}


@app.get("/api/examples")
async def get_examples():
    return {
        "sum": {"name": "Soma", "code": "10 REM Soma de dois numeros\n20 INPUT A\n30 INPUT B\n40 LET C = A + B\n50 PRINT C\n60 END"},
        "comparison": {"name": "Maior de dois", "code": "10 REM Compara qual numero e maior\n20 INPUT A\n30 INPUT B\n40 IF A > B THEN 70\n50 PRINT B\n60 GOTO 80\n70 PRINT A\n80 END"},
        "count": {"name": "Contagem", "code": "10 LET X = 0\n20 LET X = X + 1\n30 IF X < 3 THEN 20\n40 PRINT X"},
    }

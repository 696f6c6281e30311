class BasicError(Exception):
    def __init__(self, message, line=None, column=None):
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self):
        message = super().__str__()
        if self.line is not None:
            return f"Linha {self.line}: {message}"
        return message


# --- Erros de análise ---

class ParseError(BasicError):
    pass

class UnknownStatementError(ParseError):
    pass

class MalformedAssignError(ParseError):
    pass

class MissingThenError(ParseError):
    pass

class BadComparisonError(MissingThenError):
    pass

class UnbalancedParenError(ParseError):
    pass

class IllegalTermError(ParseError):
    pass

class ExpectedTokenError(ParseError):
    pass

class TrailingTokenError(ParseError):
    pass


# --- Erros de avaliação ---

class EvalError(BasicError):
    pass

class UnboundVariableError(EvalError):
    def __init__(self, name, line=None):
        super().__init__(f"Variável '{name}' não definida", line)
        self.name = name

class DivisionByZeroError(EvalError):
    pass


# --- Erros de execução ---

class RunError(BasicError):
    pass

class UndefinedLineError(RunError):
    def __init__(self, target, line=None):
        super().__init__(f"Destino de goto {target} não existe", line)
        self.target = target

class UnparsedLineError(RunError):
    pass

class StepLimitError(RunError):
    pass

class InputError(RunError):
    pass


class UnknownLineError(BasicError):
    pass

"""
Console interativo do BASIC: linhas numeradas entram no programa, um número
sozinho apaga a linha, LET/PRINT/INPUT sem número são executados na hora e os
comandos RUN, LIST, CLEAR, HELP e QUIT controlam o programa.
"""
import logging
import sys

from config import configure_logging
from errors import BasicError
from interpreter import Interpreter, execute
from lexer import TokenType
from parser import Parser, parse_line
from program import Program
from state import EvalState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

HELP_TEXT = """\
Comandos disponíveis:
   RUN     - Executa o programa
   LIST    - Lista o programa
   CLEAR   - Apaga o programa e as variáveis
   HELP    - Mostra esta mensagem
   QUIT    - Sai do interpretador
   REM     - Comentário; o resto da linha é ignorado
   LET     - Atribuição: LET variavel = expressao
   PRINT   - Imprime o valor de uma expressão
   INPUT   - Lê um inteiro do usuário e guarda na variável
   GOTO    - Desvia incondicionalmente para o número de linha dado
   IF      - IF exp1 op exp2 THEN n, com op sendo =, < ou >. Se a condição
             for verdadeira, a execução continua na linha n
   END     - Termina o programa"""

COMMANDS = ('RUN', 'LIST', 'CLEAR', 'HELP', 'QUIT')

# Comandos que podem ser executados direto no console, sem número de linha
IMMEDIATE_KEYWORDS = ('LET', 'PRINT', 'INPUT')


class BasicConsole:
    def __init__(self, program=None, state=None, write=print, confirm=None):
        self.program = program if program is not None else Program()
        self.state = state if state is not None else EvalState(write_output=write)
        self.write = write
        self.confirm = confirm or self._ask_yes_no
        self.running = True

    def _ask_yes_no(self, prompt):
        while True:
            answer = self.state.read_input(prompt).strip().lower()
            if answer in ('s', 'sim', 'y', 'yes'):
                return True
            if answer in ('n', 'nao', 'não', 'no'):
                return False
            self.write("Responda sim ou não.")

    def run_interactive(self):
        self.write("Bem-vindo ao BASIC. Digite HELP para ajuda.")
        while self.running:
            try:
                line = self.state.read_input("> ")
            except EOFError:
                break
            except KeyboardInterrupt:
                self.write("\nInterrompido")
                continue
            try:
                self.process_line(line)
            except BasicError as e:
                self.write(f"Erro: {e}")
            except EOFError:
                break
            except KeyboardInterrupt:
                self.write("\nInterrompido")

    def process_line(self, line):
        text = line.strip()
        if not text:
            return

        line_number, stream = parse_line(text)
        if line_number is not None:
            if not stream.has_more_tokens():
                self.program.remove_line(line_number)
                return
            statement = Parser(stream).parse_statement()
            self.program.upsert_line(line_number, text)
            self.program.set_parsed_statement(line_number, statement)
            return

        first = stream.peek()
        command = first.text.upper() if first.type == TokenType.WORD else None
        if command in COMMANDS and len(stream.remaining()) == 1:
            logger.debug("Comando %s", command)
            getattr(self, f"cmd_{command.lower()}")()
            return

        if command not in IMMEDIATE_KEYWORDS:
            self.write("Comando não reconhecido. Tente de novo ou peça HELP.")
            return
        statement = Parser(stream).parse_statement()
        execute(statement, self.state)

    def cmd_run(self):
        Interpreter(self.program, self.state).run()

    def cmd_list(self):
        for line in self.program:
            self.write(line.source)

    def cmd_clear(self):
        self.program.clear()
        self.state.clear()

    def cmd_help(self):
        self.write(HELP_TEXT)

    def cmd_quit(self):
        if self.confirm("Tem certeza que deseja sair? "):
            self.running = False


def main():
    configure_logging()
    BasicConsole().run_interactive()
    return 0


if __name__ == "__main__":
    sys.exit(main())

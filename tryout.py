from safecalc.api import evaluate
from safecalc.errors import CalcError
from safecalc.parser import to_postfix
from safecalc.runtime import evaluate_postfix
from safecalc.tokenizer import tokenize

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 + -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "80225/-2",
    "7/6/2000",
    "0.1 + 0.2",
    "--5",
    "2 * -(3 + 4)",
    "5 / 0",
    "1.2.3",
    "(1 + 2",
    "2 ++ 3",
    "2 + x",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
        print(f"tokens: {' '.join(str(t) for t in tokens)}")
        postfix = to_postfix(tokens)
        print(f"postfix: {' '.join(str(t) for t in postfix)}")
        print(f"value: {evaluate_postfix(postfix)!r}")
    except CalcError as e:
        print(e)

    print(f"outcome: {evaluate(code)}")

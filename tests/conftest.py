import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

tests_path = Path(__file__).resolve().parent
if str(tests_path) not in sys.path:
    sys.path.insert(0, str(tests_path))

if "notifix" in sys.modules:
    for name in list(sys.modules):
        if name == "notifix" or name.startswith("notifix."):
            del sys.modules[name]

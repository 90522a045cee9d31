from pathlib import Path

import pytest

from sentgen.config import Config
from sentgen.errors import CorpusReadError, UntrainedModelError
from sentgen.generator import SentenceGenerator

CORPUS = """the conveyor belt tears when the idler bearing seizes
operator reports excessive vibration on the bucket wheel boom
hydraulic pump fails to build pressure after a seal leak
!reset
the slew drive gearbox loses oil through a cracked housing
cutting teeth wear rapidly when digging abrasive material
"""


def _cfg(tmp_path: Path, **overrides) -> Config:
    corpus = tmp_path / "train" / "corpus.txt"
    corpus.parent.mkdir(parents=True, exist_ok=True)
    corpus.write_text(CORPUS, encoding="utf-8")
    defaults = dict(
        paths={
            "training": str(corpus),
            "output": str(tmp_path / "output" / "output.txt"),
            "model": str(tmp_path / "asset" / "classifier.json"),
        },
        num_sentences=8,
        seed=5,
    )
    defaults.update(overrides)
    return Config(**defaults)


def test_learn_trains_and_saves_model(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path)
    generator = SentenceGenerator(cfg)

    generator.learn()

    assert generator.classifier is not None
    assert Path(cfg.paths["model"]).exists()


def test_generate_writes_one_sentence_per_line(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path)
    generator = SentenceGenerator(cfg)
    generator.learn()

    sentences = generator.generate()

    lines = Path(cfg.paths["output"]).read_text(encoding="utf-8").splitlines()
    assert lines == sentences
    assert len(lines) == 8
    assert all("<SOS>" not in line and "<EOS>" not in line for line in lines)


def test_seeded_generators_agree(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path)
    first = SentenceGenerator(cfg)
    first.learn()

    second = SentenceGenerator(cfg)
    second.load_pretrained()

    assert first.generate(5) == second.generate(5, str(tmp_path / "again.txt"))


def test_generate_without_classifier_writes_nothing(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path)
    generator = SentenceGenerator(cfg)

    with pytest.raises(UntrainedModelError):
        generator.generate()

    assert not Path(cfg.paths["output"]).exists()


def test_learn_reports_missing_corpus(tmp_path: Path) -> None:
    generator = SentenceGenerator(_cfg(tmp_path))

    with pytest.raises(CorpusReadError):
        generator.learn(training_path=str(tmp_path / "nope.txt"))


def test_learn_can_skip_saving(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path)
    generator = SentenceGenerator(cfg)

    generator.learn(model_path="")

    assert generator.classifier is not None
    assert not Path(cfg.paths["model"]).exists()

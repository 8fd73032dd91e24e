"""Tests for signal detectors."""

from contractlint.signals import (
    SetterRegistry,
    StateSetterDetector,
    collect_signals,
    default_detectors,
    detect_interface_mutations,
    detect_persistence_writes,
    detect_returns,
    detect_throws,
)


def test_throws_are_deduplicated_in_first_seen_order():
    body = "throw new TypeError('a');\nthrow new RangeError('b');\nthrow new TypeError('c');"
    assert [s.detail for s in detect_throws(body)] == ["TypeError", "RangeError"]


def test_throw_forms():
    assert [s.detail for s in detect_throws("throw new errors.NotFound(id);")] == ["NotFound"]
    assert [s.detail for s in detect_throws("throw ValidationError('x');")] == ["ValidationError"]
    assert detect_throws("catch (err) { throw err; }") == []


def test_returns_with_value_only():
    assert len(detect_returns("if (x) return value;")) == 1
    assert detect_returns("if (x) return;") == []
    assert detect_returns("return\n}") == []
    assert detect_returns("if (x) { return }") == []
    assert detect_returns("const returned = 1;") == []


def test_interface_mutations():
    assert [s.detail for s in detect_interface_mutations("el.innerHTML = '<b>hi</b>';")] == [
        "DOM: element.innerHTML"
    ]
    assert detect_interface_mutations("if (input.value == 'x') ok();") == []
    assert detect_interface_mutations("if (input.value === 'x') ok();") == []
    details = [s.detail for s in detect_interface_mutations("list.appendChild(node);\nnode.classList.add('on');")]
    assert details == ["DOM: element.classList", "DOM: appendChild"]


def test_persistence_writes():
    body = "await setDoc(ref, data);\nlocalStorage.setItem('k', v);"
    assert [s.detail for s in detect_persistence_writes(body)] == [
        "Firestore: setDoc()",
        "localStorage.setItem",
    ]


def test_state_setters_map_to_fields(voice_registry: SetterRegistry):
    detector = StateSetterDetector(voice_registry)
    signals = detector("setVoiceIndex(2);\nstore.setTheme('dark');")
    assert [s.source for s in signals] == ["setVoiceIndex", "setTheme"]
    assert [s.field for s in signals] == ["voiceIndex", "theme"]
    assert signals[0].detail == "app.voiceIndex (via setVoiceIndex)"


def test_setter_name_must_stand_alone():
    detector = StateSetterDetector(SetterRegistry.from_names(["setUser"]))
    assert detector("resetUser();") == []


def test_unregistered_setters_are_ignored():
    assert StateSetterDetector(SetterRegistry())("setAnything(1);") == []


def test_collect_signals_uses_every_detector(voice_registry: SetterRegistry):
    body = "throw new Error('x');\nreturn 1;\nsetSpeed(2);\nel.textContent = 'a';\naddDoc(col, doc);"
    kinds = [s.kind for s in collect_signals(body, default_detectors(voice_registry))]
    assert kinds == ["throws", "returns", "state-mutation", "interface-mutation", "persistence-write"]

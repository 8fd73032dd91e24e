"""Markdown explanations for every issue kind contractlint emits."""

RULE_EXPLANATIONS: dict[str, str] = {
    "missing-throws": """
# missing-throws

A function raises errors (`throw new X(...)`) but carries no `@throws` tag
in the comment block directly above it.

Callers cannot see which failures to expect without reading the body.

**Fix**

```js
// @throws {ValidationError}
function save(record) {
  if (!record.id) throw new ValidationError('id required');
}
```

Checker: `error-contracts`. Severity: `contracts.error_contract_severity`.
""",
    "missing-returns": """
# missing-returns

A function returns a value (or is `async`, and therefore returns a promise)
but has no `@returns` / `@return` tag.

Functions whose only `return` statements are bare `return;` are exempt.

**Fix**

```js
// @returns {Promise<User>}
async function loadUser(id) { ... }
```

Checker: `return-types`. Severity: `contracts.return_type_severity`.
""",
    "missing-mutates-state": """
# missing-mutates-state

A function performs at least `contracts.mutation_threshold` distinct
mutations without a `@mutates-state` tag. Mutations are:

- calls to registered state setters (`setX(...)`)
- DOM writes (`innerHTML =`, `classList.add`, `appendChild`, ...)
- persistence writes (`setDoc`, `localStorage.setItem`, ...)

Setter functions themselves are exempt.

**Fix**

```js
// @mutates-state: app.voiceIndex (via setVoiceIndex), DOM: innerHTML
function selectVoice(i) { ... }
```

Checker: `mutations`. Severity: `contracts.mutation_severity`.
""",
    "missing-async-boundary": """
# missing-async-boundary

An `async` function has no `@async-boundary` or `@requires-await` tag.

Opt-in checker: add `async-boundaries` to `contracts.enabled`.
""",
    "detached-annotation": """
# detached-annotation

A comment block carrying contract tags is separated from the function below
it by blank lines, so tools and readers may not associate the two.

Only functions with at least one detected signal (throws, returns,
mutations, side effects, or `async`) are checked.

Opt-in checker: add `annotation-structure` to `contracts.enabled`.
""",
    "missing-side-effects": """
# missing-side-effects

A function has at least `contracts.side_effect_threshold` distinct side
effects (network calls, storage and database writes, DOM changes, timers,
console logging, event listeners, global property writes, media playback)
but no `@side-effects` or `@pure` tag.

**Fix**

```js
// @side-effects
// - DOM: Modifies innerHTML
// - Console: Logging
// @pure false
function render(el) { ... }
```

Opt-in checker: add `side-effects` to `contracts.enabled`.
Severity: `contracts.side_effect_severity`.
""",
    "missing-nullability": """
# missing-nullability

A parameter has a default value or is null-checked in the body
(`if (!x)`, `x === null`, `x || ...`, `x ?? ...`), but no `@param` line
naming it carries a nullability marker (`{type?}`, `OPTIONAL`, `REQUIRED`,
`nullable`, `can be null`). One issue is reported per parameter.

**Fix**

```js
// @param {string?} greeting - OPTIONAL, can be null/undefined
function greet(name, greeting = 'hi') { ... }
```

Opt-in checker: add `nullability` to `contracts.enabled`.
Severity: `contracts.nullability_severity`.
""",
    "missing-todo-entry": """
# missing-todo-entry

Code carries `@todo: <document>#anchor`, but the backlog document has no
entry headed `#### Title {#anchor}`.

**Fix**: add the entry, with a `**Function:**` field, to the document.
""",
    "missing-code-annotation": """
# missing-code-annotation

The backlog document has an entry declaring a `**Function:**`, but no source
file carries a `@todo:` annotation with that entry's anchor.

**Fix**: annotate the function, or remove the entry once the work is done.
""",
    "file-path-mismatch": """
# file-path-mismatch

The entry's `**File:**` field names a different file than the one holding
the matching `@todo:` annotation. Warning only; the link still resolves.
""",
    "duplicate-todo-anchor": """
# duplicate-todo-anchor

Two backlog entries share an anchor. The first one is used; later ones are
unreachable from code.
""",
    "missing-todo-document": """
# missing-todo-document

The configured backlog document (`todos.document`) does not exist.
""",
    "missing-generator-script": """
# missing-generator-script

The build configuration (`wiring.config_file`) has no script named
`wiring.script`, so no generators are registered.
""",
    "unregistered-generator": """
# unregistered-generator

A file matching the generator naming convention exists on disk but is not
invoked by the registration script. It will never run.
""",
    "missing-generator-file": """
# missing-generator-file

The registration script invokes a generator that does not exist on disk.
The build will fail when it reaches that step.
""",
    "missing-output-path": """
# missing-output-path

A generator's source never mentions a recognized output location
(`wiring.output_patterns`). Heuristic, so reported as a warning.
""",
}


def get_rule_ids() -> list[str]:
    return list(RULE_EXPLANATIONS)

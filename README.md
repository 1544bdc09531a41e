# vulnscope

A small vulnerability detection library. It maps findings to MITRE ATT&CK
techniques, simulates scans against invented targets, holds scanner
configuration with JSON persistence, and provides detector modules for
cross-site scripting, XML external entity injection and XPath injection.

It uses only the standard library and supports Python 3.10 and later.

## Modules

- `vulnscope.mitre` – the ATT&CK catalogue. `Tactic` enumerates the tactics;
  `AttackTechnique` is a frozen record of a technique's id, name, tactics,
  description, mitigations and URL. `get_attack_mapper()` returns a shared
  `AttackMapper`, which looks a technique up by vulnerability name
  (`map_vulnerability`), by catalogue key (`get_technique_by_id`), or lists
  every technique serving a tactic (`get_techniques_by_tactic`). Lookups that
  find nothing return `None`. `tactic_to_string` and `tactic_to_color` give a
  tactic's display name and heat-map colour.
- `vulnscope.simulation` – `SimulationEngine` generates `SimulationTarget`s
  with random addresses, ports, services, versions and banners, and turns them
  into `SimulationResult`s with mock findings, a confidence score and a risk
  level. Its `confidence_level`, `realism_level` and `error_rate` properties
  clamp what they are given to their allowed ranges. Settings can be written
  to and read from JSON with `export_simulation_data` and
  `import_simulation_data`. `determine_risk_level` rates a list of findings as
  `LOW`, `MEDIUM`, `HIGH` or `CRITICAL`.
- `vulnscope.config` – `ConfigurationManager` (shared through
  `get_configuration_manager()`) holds `SecurityConfig`, `NetworkConfig`,
  `LoggingConfig` and `SimulationConfig` and an `Environment`. `save(path)`
  writes all sections as JSON; `load(path)` reads them back, leaving absent
  sections untouched and raising `ValueError` on malformed JSON or wrongly
  typed values. `validation_errors()` and `is_valid()` check the settings,
  `reset()` restores defaults, and `set_value` / `get_value` keep free-form
  string values (`get_value` raises `KeyError` for unknown keys).
- `vulnscope.models` – `Severity`, `ModuleResult`, `Target` (a host with the
  services recorded on it through `add_service`) and the abstract `Module`
  interface with its `run(target)` method.
- `vulnscope.detectors` – `XSSDetector`, `XXEDetector` and
  `XPathInjectionDetector`. The XSS and XXE detectors need an open `HTTP`
  service on the target, try the first three of their payloads against port
  80, and report findings with ATT&CK mapping. By default they connect with
  `send_request`, a plain TCP client; pass `transport=` to supply your own
  function `(host, port, request_bytes) -> str`.

## Examples

Look up the ATT&CK technique behind a finding:

```python
from vulnscope.mitre import Tactic, get_attack_mapper

mapper = get_attack_mapper()
mapper.map_vulnerability("EternalBlue").technique_id   # "T1210"
mapper.map_vulnerability("NoSuchThing")                 # None
mapper.get_techniques_by_tactic(Tactic.LATERAL_MOVEMENT)
```

Rate a set of findings:

```python
from vulnscope.simulation import determine_risk_level

determine_risk_level([])                                         # "LOW"
determine_risk_level(["CVE-2023-XXXX: Remote code execution"])   # "CRITICAL"
```

Simulate scans without touching a network:

```python
import random
from vulnscope.simulation import SimulationEngine

engine = SimulationEngine(delay_ms=0, rng=random.Random(1))
results = engine.simulate_batch(engine.generate_targets(5))
```

Run a detector with a transport that echoes the request back:

```python
from vulnscope.detectors import XSSDetector
from vulnscope.models import Target

def echo(host, port, request):
    return request.decode("utf-8")

target = Target("web-1", ip="192.0.2.10")
target.add_service("HTTP", 80)
result = XSSDetector(transport=echo).run(target)
result.message               # "XSS vulnerabilities detected (3 instances)"
result.attack_technique_id   # "T1189"
```

Save and check the configuration:

```python
from vulnscope.config import get_configuration_manager

config = get_configuration_manager()
config.save("scanner.json")
if not config.is_valid():
    print(config.validation_errors())
```

## What it does not do

This is a library only. There is no command-line program, no scan
orchestration over IP ranges, no address-range safety checks and no report
generation; the caller decides which targets to examine and what to do with
each `ModuleResult`. Only the three detectors above are included.

## Safety

The XSS and XXE detectors send real HTTP requests unless given another
transport. Only scan systems you own or are explicitly authorised to test.
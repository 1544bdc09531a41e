"""Mapping of detected vulnerabilities onto ATT&CK techniques and tactics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache

ATTACK_BASE_URL = "https://attack.mitre.org/techniques/"


class Tactic(Enum):
    """ATT&CK tactics: the adversary's goal behind a technique."""

    INITIAL_ACCESS = "Initial Access"
    EXECUTION = "Execution"
    PERSISTENCE = "Persistence"
    PRIVILEGE_ESCALATION = "Privilege Escalation"
    DEFENSE_EVASION = "Defense Evasion"
    CREDENTIAL_ACCESS = "Credential Access"
    DISCOVERY = "Discovery"
    LATERAL_MOVEMENT = "Lateral Movement"
    COLLECTION = "Collection"
    COMMAND_AND_CONTROL = "Command and Control"
    EXFILTRATION = "Exfiltration"
    IMPACT = "Impact"


_TACTIC_COLORS = {
    Tactic.INITIAL_ACCESS: "#ff6666",
    Tactic.EXECUTION: "#ff9966",
    Tactic.LATERAL_MOVEMENT: "#ff66cc",
    Tactic.IMPACT: "#cc0000",
}
_DEFAULT_COLOR = "#cccccc"


def tactic_to_string(tactic: Tactic) -> str:
    """Return the display name of a tactic."""
    return tactic.value


def tactic_to_color(tactic: Tactic) -> str:
    """Return the heat-map colour used for a tactic."""
    return _TACTIC_COLORS.get(tactic, _DEFAULT_COLOR)


def _technique_url(technique_id: str) -> str:
    return ATTACK_BASE_URL + technique_id.replace(".", "/") + "/"


@dataclass(frozen=True)
class AttackTechnique:
    """An ATT&CK technique with its tactics and recommended mitigations."""

    technique_id: str
    name: str
    tactics: tuple[Tactic, ...] = ()
    description: str = ""
    mitigations: tuple[str, ...] = ()
    url: str = field(default="")

    def __post_init__(self) -> None:
        object.__setattr__(self, "tactics", tuple(self.tactics))
        object.__setattr__(self, "mitigations", tuple(self.mitigations))
        if not self.url:
            object.__setattr__(self, "url", _technique_url(self.technique_id))


# One technique per line:
#   key => technique-id | name | tactic, tactic | description | mitigation; mitigation; ...
_CATALOG = """
T1210 => T1210 | Exploitation of Remote Services | Lateral Movement | Adversaries may exploit remote services to gain unauthorized access to internal systems. | Apply MS17-010 security patch; Disable SMBv1 protocol; Implement network segmentation; Use application isolation and sandboxing; Enable exploit protection features
T1040 => T1040 | Network Sniffing | Credential Access, Discovery | Adversaries may sniff network traffic to capture information about an environment, including authentication material passed over the network. | Update OpenSSL to version 1.0.1g or later; Regenerate SSL certificates and private keys; Reset all passwords and session tokens; Implement network segmentation; Use encrypted protocols (TLS 1.3+); Monitor for unusual network traffic patterns
T1190 => T1190 | Exploit Public-Facing Application | Initial Access | Adversaries may attempt to exploit a weakness in an Internet-facing host or system to initially access a network. | Update Bash to version 4.3 or later; Disable CGI scripts if not needed; Implement web application firewall (WAF); Use application isolation and sandboxing; Restrict access to web services; Monitor for suspicious HTTP headers
T1189 => T1189 | Drive-by Compromise | Initial Access | Adversaries may gain access to a system through a user visiting a website over the normal course of browsing. | Implement Content Security Policy (CSP); Sanitize all user input; Use output encoding; Enable XSS protection headers; Regular security testing; Use modern frameworks with built-in XSS protection
T1110 => T1110 | Brute Force | Credential Access | Adversaries may use brute force techniques to gain access to accounts when passwords are unknown or when password hashes are obtained. | Implement account lockout policies; Use multi-factor authentication (MFA); Enforce strong password policies; Use SSH key-based authentication; Implement rate limiting; Monitor for failed login attempts
T1078 => T1078 | Valid Accounts | Initial Access, Persistence, Privilege Escalation, Defense Evasion | Adversaries may obtain and abuse credentials of existing accounts as a means of gaining Initial Access, Persistence, Privilege Escalation, or Defense Evasion. | Disable anonymous FTP access; Implement strong authentication; Use SFTP or FTPS instead of FTP; Regular account audits; Implement least privilege access; Monitor for unauthorized access
XXE => T1190 | Exploit Public-Facing Application | Initial Access | XXE (XML External Entity) injection allows attackers to read local files, perform SSRF, and potentially execute code. | Disable XML external entity processing in all XML parsers; Use less complex data formats like JSON instead of XML; Patch and upgrade all XML processors to latest versions; Implement input validation and sanitization for XML data; Use whitelisting for allowed XML schemas
SSRF => T1190 | Exploit Public-Facing Application | Initial Access | SSRF allows attackers to make requests from the server to access internal resources and cloud metadata. | Implement allowlists for allowed destinations; Disable unnecessary URL schemas (file://, gopher://, etc.); Use network segmentation to restrict server-side requests; Validate and sanitize all user-supplied URLs; Implement response validation
Command Injection => T1059 | Command and Scripting Interpreter | Execution | Command injection allows execution of arbitrary OS commands, leading to complete system compromise. | Never pass user input directly to system commands; Use parameterized APIs instead of shell commands; Implement strict input validation and sanitization; Use allowlists for allowed characters and commands; Run applications with minimal privileges
Weak Cipher => T1040 | Network Sniffing | Collection, Credential Access | Weak SSL/TLS ciphers allow attackers to decrypt traffic and perform man-in-the-middle attacks. | Disable weak ciphers (RC4, DES, 3DES, MD5); Use TLS 1.2 or higher; Implement perfect forward secrecy; Use strong cipher suites (AES-GCM); Regularly update SSL/TLS configurations
T1078.002 => T1078.002 | Valid Accounts: Domain Accounts | Initial Access, Persistence, Privilege Escalation | LDAP injection allows attackers to manipulate directory queries to bypass authentication and extract sensitive information. | Use parameterized LDAP queries; Implement strict input validation; Escape special LDAP characters; Use least privilege for LDAP bind accounts; Enable LDAP signing and encryption; Monitor for suspicious LDAP queries
T1550.001 => T1550.001 | Use Alternate Authentication Material: Application Access Token | Defense Evasion, Lateral Movement | JWT vulnerabilities allow attackers to forge authentication tokens and impersonate users. | Use strong signing secrets (256+ bits); Never accept 'alg: none' tokens; Validate algorithm matches expected type; Implement token expiration and rotation; Use RS256 instead of HS256 when possible; Validate all JWT claims
GraphQL => T1190 | Exploit Public-Facing Application | Initial Access | GraphQL vulnerabilities expose schema information and enable DoS attacks through introspection and complex queries. | Disable introspection in production; Implement query depth limiting; Implement query complexity analysis; Use query allowlisting; Implement rate limiting; Monitor for suspicious query patterns
T1203 => T1203 | Exploitation for Client Execution | Execution | Insecure deserialization allows attackers to execute arbitrary code by crafting malicious serialized objects. | Never deserialize untrusted data; Use safe serialization formats (JSON instead of native); Implement integrity checks on serialized data; Use allowlists for deserializable classes; Run deserialization in sandboxed environments; Monitor for deserialization errors
T1539 => T1539 | Steal Web Session Cookie | Credential Access | CORS misconfigurations allow malicious websites to read sensitive data from authenticated sessions. | Never use wildcard (*) with credentials; Validate Origin header against allowlist; Do not reflect arbitrary origins; Use HTTPS for all CORS-enabled endpoints; Implement proper authentication checks; Set SameSite cookie attribute
T1584.001 => T1584.001 | Compromise Infrastructure: Domains | Initial Access | Subdomain takeover allows attackers to host malicious content on legitimate domains via dangling DNS records. | Regularly audit DNS records; Remove unused CNAME records; Monitor for DNS changes; Claim cloud resources before creating DNS records; Use DNS monitoring services; Implement DNS CAA records
"""

# Each line: technique-id: alias; alias; ...
_ALIASES = """
T1210: EternalBlue; MS17-010; EternalBlueDetector; BlueKeep; CVE-2019-0708; BlueKeepDetector
T1040: Heartbleed; CVE-2014-0160; HeartbleedDetector; Weak Cipher; WeakCipherDetector; Weak SSL; Weak TLS
T1190: Shellshock; CVE-2014-6271; ShellshockDetector; Log4Shell; CVE-2021-44228; Log4ShellDetector
T1190: SQLInjection; SQLInjectionDetector; DirectoryTraversal; PathTraversal; DirectoryTraversalDetector
T1190: XXE; XXEDetector; XML External Entity; SSRF; SSRFDetector; Server-Side Request Forgery
T1190: GraphQL Injection; GraphQLInjectionDetector
T1189: XSS; CrossSiteScripting; XSSDetector
T1110: SSHBruteForce; SSHBruteForceDetector
T1078: FTPAnonymous; FTPAnonymousDetector
T1059: Command Injection; CommandInjectionDetector; OS Command Injection
T1078.002: LDAP Injection; LDAPInjectionDetector
T1550.001: JWT Vulnerabilities; JWTDetector
T1203: Insecure Deserialization; DeserializationDetector
T1539: CORS Misconfiguration; CORSDetector
T1584.001: Subdomain Takeover; SubdomainTakeoverDetector
"""


def _parse_catalog(text: str) -> dict[str, AttackTechnique]:
    techniques: dict[str, AttackTechnique] = {}
    for line in text.strip().splitlines():
        key, separator, rest = line.partition(" => ")
        fields = rest.split(" | ")
        if not separator or len(fields) != 5:
            raise ValueError(f"malformed catalogue line: {line!r}")
        technique_id, name, tactic_names, description, mitigation_text = fields
        tactics = tuple(Tactic(item.strip()) for item in tactic_names.split(","))
        mitigations = tuple(item.strip() for item in mitigation_text.split(";"))
        techniques[key.strip()] = AttackTechnique(
            technique_id, name, tactics, description, mitigations
        )
    return techniques


def _parse_aliases(text: str) -> dict[str, str]:
    aliases: dict[str, str] = {}
    for line in text.strip().splitlines():
        technique_id, _, names = line.partition(": ")
        for alias in names.split(";"):
            aliases[alias.strip()] = technique_id
    return aliases


class AttackMapper:
    """Looks up ATT&CK techniques by id, by vulnerability name, or by tactic."""

    def __init__(self) -> None:
        self._techniques = _parse_catalog(_CATALOG)
        self._vulnerability_to_technique = _parse_aliases(_ALIASES)

    def map_vulnerability(self, vulnerability_name: str) -> AttackTechnique | None:
        """Return the technique a vulnerability name maps to, or None."""
        technique_id = self._vulnerability_to_technique.get(vulnerability_name)
        if technique_id is None:
            return None
        return self.get_technique_by_id(technique_id)

    def get_technique_by_id(self, technique_id: str) -> AttackTechnique | None:
        """Return the technique stored under the given key, or None."""
        return self._techniques.get(technique_id)

    def get_techniques_by_tactic(self, tactic: Tactic) -> list[AttackTechnique]:
        """Return every stored technique that serves the tactic, in key order."""
        return [
            technique
            for _, technique in sorted(self._techniques.items())
            if tactic in technique.tactics
        ]


@lru_cache(maxsize=None)
def get_attack_mapper() -> AttackMapper:
    """Return the shared mapper instance."""
    return AttackMapper()
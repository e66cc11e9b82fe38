"""auth/ -- Account authentication package.

Credential hashing, session tokens, the user repository, the registration /
login / profile flows and the authorization gate.

Layer rule: auth/ imports only stdlib + third-party libraries, plus core/
for configuration. It does NOT import from api/.
api/ imports from auth/, not the other way around.
"""

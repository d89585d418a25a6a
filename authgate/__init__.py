"""
Gate for requests that must be verified by a remote authentication service.

The gate is WSGI middleware. Clients identify themselves with two headers,
``x-api-key`` and ``x-account``. The gate forwards both to a verification
endpoint (configured as ``AUTH_ENDPOINT``) and interprets the result:

- if either header is missing, the gate responds ``401`` without calling the
  endpoint;
- if the endpoint can't be reached, or answers ``200`` with something other
  than JSON, the gate responds ``500``;
- if the endpoint answers with any other status, that status and body are
  passed back to the client as they are;
- otherwise the access token in the endpoint's response is set on the client
  as a ``token`` cookie (``HttpOnly``, ``Secure``), and the request proceeds
  to the wrapped application.

There is no caching, retrying or rate limiting; every inbound request is
verified with exactly one outbound call.
"""

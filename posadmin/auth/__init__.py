"""Identity, sessions and sign-in. Routes live in `posadmin.auth.routes`."""

"""Host adapters bridging input masks to UI toolkits."""

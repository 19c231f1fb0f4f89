"""
Serial control of a television that answers each command frame with a single line.

- Conduit: a bi-directional byte stream to the television, normally a serial port.
- LineTransport: writes command frames to the conduit and publishes each line read back.
- CommandDispatcher: keeps one command in flight at a time and hands each line to the command it answers.
  Commands sent while another is in flight are queued and answered in the order sent.
- Television: gets and sets the power state and input by sending commands and interpreting the replies.
- connect(): opens the serial port for configured device settings and wires the above together.

The device protocol has no request identifiers, so a response can only be matched to its command by
order. Nothing but the dispatcher should write to the transport.
"""

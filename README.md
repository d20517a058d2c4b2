# syncdemos

Three small, runnable demonstrations of classic synchronisation problems.
Each one runs until stopped and prints a running log of what its threads
are doing. The log lines are written in Croatian.

## Installation

```
pip install .
```

## The demos

None of the commands takes options other than `--help`.

### Readers, writers and deleters over a shared list

```
syncdemos-monitors
```

Two writers start first. Ten readers join 25 seconds later, and one
deleter joins 10 seconds after that. The list starts empty. Readers and
the deleter skip a round while it is empty. Stop the program with Ctrl-C.

Coordination is done by `syncdemos.monitors.ListMonitor`:

- readers may read at the same time as one another and as a writer;
- only one writer may append at a time;
- a deleter needs the list to itself, and a waiting deleter holds back new
  readers and writers.

The monitor has these methods:

- `start_read`, `end_read`
- `start_write`, `end_write`
- `start_delete`, `end_delete`
- `snapshot`, which returns a copy of the list.

Reading or deleting an index that is not in the list raises `IndexError`.
Ending an operation that was never started raises `RuntimeError`.

The worker loops `reader`, `writer` and `deleter` can also be driven
directly. Each takes:

- a monitor;
- an id;
- a `random.Random`;
- a sleep function;
- a number of rounds. `None` means run forever.

Writers append values from 1 to 100. Every pause lasts 5 to 10 seconds.

### A pipeline of ring buffers guarded by semaphores

```
syncdemos-semaphores
```

The program asks for four numbers:

- the number of input threads;
- the number of worker threads;
- the number of output threads;
- the size of each buffer.

Each must be at least 1. Anything else ends the program with exit status 1.

There is one input buffer per worker and one output buffer per output
thread.

- Input threads put a random capital letter into a random input buffer
  every 5 to 10 seconds.
- Workers start 30 seconds after the input threads. Each takes letters
  from its own buffer, lowers them, and places them in a random output
  buffer.
- Output threads start 10 seconds after the workers. Every 3 seconds each
  prints the next letter of its buffer. When there is none, it prints the
  last letter it saw; before any letter has arrived, that is `0`.

Each buffer is a `syncdemos.semaphores.RingBuffer`. Its methods are `put`,
`take` and `render`. When it is full, `put` drops the oldest entry, and an
empty slot shows as `-`.

The whole arrangement is a `syncdemos.semaphores.Pipeline`. Its single
steps, `input_step`, `worker_step` and `output_step`, can be called on
their own. `run(stop)` runs the threads until the given
`threading.Event` is set.

### Prioritised interrupt handling

```
syncdemos-interrupts
```

The main loop prints an iteration counter once a second. Signals act as
interrupts of four priority levels:

| Signal  | Priority |
|---------|----------|
| SIGUSR1 | 1        |
| SIGUSR2 | 2        |
| SIGTERM | 3        |
| SIGINT  | 4        |

The steps for each interrupt are:

1. The interrupt is accepted for 2 seconds, with the other sources masked.
2. Its waiting flag is raised.
3. Every waiting interrupt with a priority above the current one is
   serviced, highest first. Servicing takes 10 one-second steps, followed
   by a 2-second return.

A higher priority preempts a lower one. Lower ones stay flagged until the
higher one finishes. The waiting flags and the saved context are printed
as they change.

Ctrl-C sends SIGINT, which is an interrupt here and does not stop the
program. Send SIGQUIT to stop it.

The same logic is available without signals through
`syncdemos.interrupts.InterruptController`:

- `raise_interrupt(priority)` takes a priority from 1 to 4. Any other value
  raises `ValueError`.
- `request_stop()` asks the main loop to finish.
- `run()` runs the main loop and returns the number of iterations.
- The properties `current`, `waiting`, `context` and `stopped` show its
  state.

## Running the tests

```
pip install .[test]
pytest
```